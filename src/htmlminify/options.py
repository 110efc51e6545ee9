"""Minifier configuration.

Options are resolved once, when a minifier is constructed, into an immutable
`MinifyOptions` value. Callers may pass either a `MinifyOptions` or a mapping
keyed by the camelCase option names::

    {
        "startTagBeforeSlash": "REMOVE_SPACE_ONLY",
        "comment": True,
        "deleteDuplicateAttribute": True,
        "excludeComment": [r"<!--/?nocache-->"],
        "optimizationLevel": "ADVANCED",
    }

Keys that are not supplied keep their defaults; unknown keys are ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


class _StrEnum(str, Enum):
    """Backport of enum.StrEnum (Python 3.11+).

    We support Python 3.10+, so we use this small mixin instead.
    """


class SlashStyle(_StrEnum):
    """Rendering of the self-closing slash: ``<br/>`` or ``<br />``."""

    REMOVE_WHITE_SPACE = "REMOVE_WHITE_SPACE"
    REMOVE_SPACE_ONLY = "REMOVE_SPACE_ONLY"


class OptimizationLevel(_StrEnum):
    SIMPLE = "SIMPLE"
    ADVANCED = "ADVANCED"


@dataclass(frozen=True, slots=True)
class MinifyOptions:
    start_tag_before_slash: SlashStyle = SlashStyle.REMOVE_WHITE_SPACE
    comment: bool = True
    delete_duplicate_attribute: bool = True
    exclude_comment: tuple[re.Pattern[str], ...] = ()
    optimization_level: OptimizationLevel = OptimizationLevel.SIMPLE

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "start_tag_before_slash",
            _coerce_enum(SlashStyle, self.start_tag_before_slash, "startTagBeforeSlash"),
        )
        object.__setattr__(
            self,
            "optimization_level",
            _coerce_enum(OptimizationLevel, self.optimization_level, "optimizationLevel"),
        )
        object.__setattr__(self, "comment", bool(self.comment))
        object.__setattr__(self, "delete_duplicate_attribute", bool(self.delete_duplicate_attribute))
        object.__setattr__(self, "exclude_comment", compile_patterns(self.exclude_comment))

    @property
    def advanced(self) -> bool:
        return self.optimization_level is OptimizationLevel.ADVANCED

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> MinifyOptions:
        """Overlay ``options`` on the defaults.

        Both the camelCase names and the matching field names are accepted.
        """
        if not options:
            return cls()
        fields: dict[str, Any] = {}
        for key, value in options.items():
            field_name = OPTION_KEYS.get(key)
            if field_name is None:
                logger.debug("Ignoring unknown minify option %r", key)
                continue
            fields[field_name] = value
        return cls(**fields)


OPTION_KEYS = {
    "startTagBeforeSlash": "start_tag_before_slash",
    "comment": "comment",
    "deleteDuplicateAttribute": "delete_duplicate_attribute",
    "excludeComment": "exclude_comment",
    "optimizationLevel": "optimization_level",
    "start_tag_before_slash": "start_tag_before_slash",
    "delete_duplicate_attribute": "delete_duplicate_attribute",
    "exclude_comment": "exclude_comment",
    "optimization_level": "optimization_level",
}


def _coerce_enum(enum_cls: type[_StrEnum], value: Any, key: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        value = value.upper()
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        msg = f"Invalid value {value!r} for option {key!r} (expected one of: {choices})"
        raise ValueError(msg) from None


def compile_patterns(patterns: Iterable[str | re.Pattern[str]] | str | re.Pattern[str] | None) -> tuple[re.Pattern[str], ...]:
    """Compile exclude-comment patterns; strings get ``re.DOTALL``."""
    if not patterns:
        return ()
    if isinstance(patterns, (str, re.Pattern)):
        patterns = [patterns]
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
        else:
            compiled.append(re.compile(pattern, re.DOTALL))
    return tuple(compiled)


def resolve_options(options: MinifyOptions | Mapping[str, Any] | None) -> MinifyOptions:
    if isinstance(options, MinifyOptions):
        return options
    resolved = MinifyOptions.from_mapping(options)
    logger.debug("Resolved minify options: %s", resolved)
    return resolved
