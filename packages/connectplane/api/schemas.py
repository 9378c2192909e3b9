"""Pydantic schemas for connector plugin APIs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from connectplane.configdef.report import ValidationReport
    from connectplane.plugins.exceptions import PluginError
    from connectplane.plugins.listing import PluginListingEntry


class ConfigKeyInfo(BaseModel):
    name: str
    type: Literal["BOOLEAN", "STRING", "INT", "LONG", "DOUBLE", "LIST", "CLASS", "PASSWORD"]
    required: bool
    default_value: str | None = None
    importance: Literal["HIGH", "MEDIUM", "LOW"]
    documentation: str
    group: str | None = None
    order: int = -1
    width: Literal["NONE", "SHORT", "MEDIUM", "LONG"]
    display_name: str
    dependents: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ConfigValueInfo(BaseModel):
    name: str
    value: str | None = None
    recommended_values: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    visible: bool = True

    model_config = ConfigDict(extra="forbid")


class ConfigInfo(BaseModel):
    definition: ConfigKeyInfo | None = None
    value: ConfigValueInfo

    model_config = ConfigDict(extra="forbid")


class ConfigInfos(BaseModel):
    """Validation report for one connector configuration."""

    name: str
    error_count: int = Field(..., ge=0)
    groups: list[str] = Field(default_factory=list)
    configs: list[ConfigInfo] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_report(cls, report: ValidationReport) -> ConfigInfos:
        return cls.model_validate(report.to_dict())


class ConnectorPluginInfo(BaseModel):
    """Listing entry for one connector plugin."""

    class_name: str = Field(..., alias="class")
    type: Literal["source", "sink", "unknown"]
    version: str

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @classmethod
    def from_entry(cls, entry: PluginListingEntry) -> ConnectorPluginInfo:
        return cls.model_validate(entry.to_dict())

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    status_code: int
    error_code: str
    message: str
    plugin_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_error(cls, error: PluginError) -> ErrorResponse:
        return cls.model_validate(error.to_response_dict())
