"""Extras value types and best-effort conversion.

Extras values are limited to what JSON round-trips without loss:
``bool``, ``int``, ``float`` and ``str``. :func:`convert_extra` turns a
stored value into the type a caller asks for, or raises
:class:`ExtraConversionError` so the caller can fall back to its default.
"""

from __future__ import annotations

import math
import re
from typing import Any, Union

from .exceptions import ExtraConversionError

__all__ = ["ExtraValue", "EXTRA_TYPES", "is_extra_value", "convert_extra"]

ExtraValue = Union[bool, int, float, str]

EXTRA_TYPES: tuple[type, ...] = (bool, int, float, str)

_TRUE_WORDS = {"true"}
_FALSE_WORDS = {"false"}

# Plain ASCII literals only; no digit separators or non-ASCII digits
_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)


def is_extra_value(value: Any) -> bool:
    """Return True if *value* may be stored in the extras map."""
    if isinstance(value, float) and not math.isfinite(value):
        # json would emit NaN/Infinity, which is not valid JSON
        return False
    return isinstance(value, EXTRA_TYPES)


def _is_instance(value: Any, target: type) -> bool:
    # bool is a subclass of int but never counts as one here
    if target is int or target is float:
        return type(value) is target
    return isinstance(value, target)


def _to_bool(value: Any) -> bool:
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError("not a boolean literal")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        # round() on a NaN/inf raises ValueError/OverflowError
        return round(value)
    if isinstance(value, str):
        text = value.strip()
        if not _INT_RE.fullmatch(text):
            raise ValueError("not an integer literal")
        return int(text)
    raise TypeError("unsupported source type")


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not _FLOAT_RE.fullmatch(text):
            raise ValueError("not a number literal")
        return float(text)
    raise TypeError("unsupported source type")


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        # lowercase so the result converts back through _to_bool
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError("unsupported source type")


_CONVERTERS = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    str: _to_str,
}


def convert_extra(value: Any, target: type) -> Any:
    """Convert a stored extras *value* to *target*.

    Values already of the target type are returned unchanged. Conversions
    between the four extras types follow fixed rules (numeric strings to
    numbers, ``"true"``/``"false"`` to booleans, non-zero numbers to
    ``True`` and so on). Anything else raises :class:`ExtraConversionError`.
    """
    if not isinstance(target, type):
        raise ExtraConversionError(value, target)
    if _is_instance(value, target):
        return value

    converter = _CONVERTERS.get(target)
    if converter is None:
        raise ExtraConversionError(value, target)

    try:
        return converter(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ExtraConversionError(value, target, cause=exc) from exc
