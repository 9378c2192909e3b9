"""Merging of framework-level and plugin-level configuration schemas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .schema import ConfigSchema

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .types import ConfigKeyDefinition

logger = logging.getLogger(__name__)


class MergedSchema(ConfigSchema):
    """Union of a base schema and a plugin schema.

    ``overridden`` names the base keys whose definition was replaced by the
    plugin's own declaration.
    """

    __slots__ = ("overridden",)

    def __init__(
        self,
        definitions: Iterable[ConfigKeyDefinition] = (),
        overridden: Iterable[str] = (),
    ) -> None:
        super().__init__(definitions)
        self.overridden = frozenset(overridden)


def merge(base: ConfigSchema, specific: ConfigSchema) -> MergedSchema:
    """Combine ``base`` and ``specific`` into one schema.

    Every key of either input appears exactly once. When both declare the same
    key the plugin-specific definition wins, so a plugin can refine a
    framework key (for example by attaching a recommender). Ordering is base
    keys in base declaration order, followed by the plugin-only keys in the
    plugin's declaration order.

    Plugin-wins precedence is a convention carried over from how connector
    schemas have always been combined, not a guarantee plugins should rely on
    to change the semantics of a framework key.
    """
    overridden = [name for name in base if name in specific]
    definitions = [specific[name] if name in specific else base[name] for name in base]
    definitions.extend(specific[name] for name in specific if name not in base)

    if overridden:
        logger.debug("Plugin schema overrides base keys: %s", ", ".join(overridden))
    return MergedSchema(definitions, overridden)
