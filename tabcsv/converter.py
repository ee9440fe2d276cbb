"""Conversion between cell text and Python values."""

from __future__ import annotations

import locale
import math
import re
from functools import lru_cache
from typing import Any

from .params import ConverterParams

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_STRICT_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class NoConverterError(TypeError):
    """Raised for a value type that has no text conversion."""

    def __init__(self, message: str = "unsupported conversion datatype") -> None:
        super().__init__(message)


@lru_cache(maxsize=None)
def _float_prefix_pattern(decimal_point: str) -> re.Pattern[str]:
    dp = re.escape(decimal_point)
    decimal = rf"(?:\d+(?:{dp}\d*)?|{dp}\d+)(?:[eE][+-]?\d+)?"
    hexa = r"0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)(?:p[+-]?\d+)?"
    return re.compile(
        rf"\s*([+-]?)(?:(inf(?:inity)?)|(nan)(?:\(\w*\))?|({hexa})|({decimal}))",
        re.ASCII | re.IGNORECASE,
    )


def _parse_int(text: str) -> int:
    """Parse the leading integer of ``text``, ignoring anything after it."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"no integer conversion: {text!r}")
    return int(match.group(1))


def _parse_float_prefix(text: str, decimal_point: str) -> float:
    """Parse the leading floating-point number of ``text``."""
    match = _float_prefix_pattern(decimal_point).match(text)
    if match is None:
        raise ValueError(f"no floating-point conversion: {text!r}")
    sign, inf, nan, hexa, decimal = match.groups()
    if inf:
        value = math.inf
    elif nan:
        value = math.nan
    elif hexa:
        value = float.fromhex(hexa)
    else:
        value = float(decimal.replace(decimal_point, "."))
        if math.isinf(value):
            raise ValueError(f"floating-point value out of range: {text!r}")
    return -value if sign == "-" else value


def _parse_float_strict(text: str) -> float:
    """Parse ``text`` as a classic-locale number that must span the whole text."""
    if _STRICT_FLOAT.fullmatch(text) is None:
        raise ValueError(f"no floating-point conversion: {text!r}")
    return float(text)


class Converter:
    """Converts cell text to ``int``, ``float`` or ``str`` values and back."""

    def __init__(self, params: ConverterParams | None = None) -> None:
        self.params = params if params is not None else ConverterParams()

    def to_str(self, value: Any) -> str:
        """Return the cell text for ``value``."""
        if isinstance(value, bool):
            raise NoConverterError()
        if isinstance(value, str):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return repr(value)
        raise NoConverterError()

    def to_val(self, text: str, type_: type = str) -> Any:
        """Convert cell ``text`` to a value of ``type_``."""
        if type_ is str:
            return text
        if type_ is int:
            try:
                return _parse_int(text)
            except ValueError:
                if not self.params.has_default_converter:
                    raise
                return int(self.params.default_integer)
        if type_ is float:
            try:
                if self.params.numeric_locale:
                    decimal_point = locale.localeconv()["decimal_point"] or "."
                    return _parse_float_prefix(text, decimal_point)
                return _parse_float_strict(text)
            except ValueError:
                if not self.params.has_default_converter:
                    raise
                return float(self.params.default_float)
        raise NoConverterError()