"""Settings model for MyEmployeeProject.

:class:`AppSettings` is the record persisted to ``config.json``. Python
attribute names are snake_case; the file uses the camelCase wire names
listed in :data:`WIRE_NAMES`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .conversion import ExtraValue, is_extra_value
from .exceptions import ConfigParseError

logger = logging.getLogger(__name__)

__all__ = ["AppSettings", "WIRE_NAMES", "DEFAULT_CHART_SORT_ORDER"]

DEFAULT_CHART_SORT_ORDER = "Alphabetical"

# attribute name -> wire name, in file order
WIRE_NAMES: Dict[str, str] = {
    "dark_theme": "darkTheme",
    "auto_update": "autoUpdate",
    "chart_sort_order": "chartSortOrder",
    "show_values": "showValues",
    "high_contrast": "highContrast",
    "extras": "extras",
}

_FIELD_TYPES: Dict[str, type] = {
    "dark_theme": bool,
    "auto_update": bool,
    "chart_sort_order": str,
    "show_values": bool,
    "high_contrast": bool,
}


@dataclass
class AppSettings:
    """User-facing preferences plus free-form extras."""

    dark_theme: bool = False
    auto_update: bool = True
    chart_sort_order: str = DEFAULT_CHART_SORT_ORDER
    show_values: bool = True
    high_contrast: bool = False
    extras: Dict[str, ExtraValue] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation (camelCase keys)."""
        data: Dict[str, Any] = {}
        for attr, wire in WIRE_NAMES.items():
            value = getattr(self, attr)
            data[wire] = dict(value) if attr == "extras" else value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]],
                  source: Optional[Any] = None) -> "AppSettings":
        """Build settings from a decoded JSON document.

        Unknown keys are ignored and missing keys keep their defaults. A
        ``None`` document (JSON ``null``) yields defaults. A fixed field of
        the wrong JSON type raises :class:`ConfigParseError`; extras entries
        outside the supported value types are dropped with a warning.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"Settings root must be an object, got {type(data).__name__}",
                path=source,
            )

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            wire = WIRE_NAMES[f.name]
            if wire not in data:
                continue
            raw = data[wire]
            if f.name == "extras":
                kwargs["extras"] = _parse_extras(raw, source)
            else:
                expected = _FIELD_TYPES[f.name]
                if type(raw) is not expected:
                    raise ConfigParseError(
                        f"Field '{wire}' must be {expected.__name__}, "
                        f"got {type(raw).__name__}",
                        path=source,
                    )
                kwargs[f.name] = raw
        return cls(**kwargs)


def _parse_extras(raw: Any, source: Optional[Any]) -> Dict[str, ExtraValue]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigParseError(
            f"Field 'extras' must be an object, got {type(raw).__name__}",
            path=source,
        )
    extras: Dict[str, ExtraValue] = {}
    for key, value in raw.items():
        if is_extra_value(value):
            extras[key] = value
        else:
            logger.warning("Dropping extras entry '%s': unsupported value %r", key, value)
    return extras
