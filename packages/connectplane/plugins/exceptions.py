"""Plugin-specific exceptions."""

from __future__ import annotations

from typing import Any

CLIENT_ERROR_STATUS = 400
SERVER_ERROR_STATUS = 500


class PluginError(Exception):
    """Base error for plugin-related issues.

    Carries structured context for transport layers: ``status_code`` tells a
    REST adapter which response category to use, and ``to_response_dict``
    renders the error body.
    """

    status_code: int = SERVER_ERROR_STATUS
    default_error_code: str = "PLUGIN_ERROR"

    def __init__(
        self,
        message: str,
        plugin_id: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.plugin_id = plugin_id
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

    def to_response_dict(self) -> dict[str, Any]:
        """Convert to API response format."""
        result: dict[str, Any] = {
            "status_code": self.status_code,
            "error_code": self.error_code,
            "message": str(self),
        }
        if self.plugin_id is not None:
            result["plugin_id"] = self.plugin_id
        if self.details:
            result["details"] = self.details
        return result


class PluginResolutionError(PluginError):
    """Raised when an identifier cannot be resolved to exactly one plugin."""

    status_code = CLIENT_ERROR_STATUS

    def __init__(self, message: str, identifier: str, **kwargs: Any) -> None:
        super().__init__(message, plugin_id=identifier, **kwargs)
        self.identifier = identifier


class PluginNotFoundError(PluginResolutionError):
    """Raised when no loaded plugin matches the identifier."""

    default_error_code = "PLUGIN_NOT_FOUND"

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Failed to find any class that implements Connector and which name matches {identifier}",
            identifier,
        )


class PluginAmbiguousError(PluginResolutionError):
    """Raised when more than one plugin shares the simple name or alias."""

    default_error_code = "PLUGIN_AMBIGUOUS"

    def __init__(self, identifier: str, candidates: list[str]) -> None:
        super().__init__(
            f"More than one connector matches alias {identifier}. Please use full package and class name "
            f"instead. Classes found: {', '.join(candidates)}",
            identifier,
            details={"candidates": list(candidates)},
        )
        self.candidates = list(candidates)


class PluginRegistrationError(PluginError):
    """Raised when a plugin cannot be added to a catalog."""

    default_error_code = "PLUGIN_REGISTRATION_FAILED"


class PluginDuplicateError(PluginRegistrationError):
    """Raised when two registrations share a canonical name."""

    default_error_code = "PLUGIN_DUPLICATE"


class PluginFaultError(PluginError):
    """Raised when a plugin's own code fails while the engine needs its output.

    Only raised where there is no way to continue without the plugin, such as
    when its configuration schema cannot be obtained. Faults in version or
    validation hooks are isolated and never raised past the engine.
    """

    default_error_code = "PLUGIN_FAULT"

    def __init__(self, message: str, plugin_id: str, operation: str) -> None:
        super().__init__(message, plugin_id=plugin_id, details={"operation": operation})
        self.operation = operation
