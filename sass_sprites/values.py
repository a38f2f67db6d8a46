"""Values exchanged with the stylesheet compiler.

Strings cross the boundary as plain `str`; numbers carry an optional unit and
support unit-aware addition.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import NoUnitError, UnitMismatchError

# Absolute lengths expressed in px
_PX_PER_UNIT: dict[str, float] = {
    "px": 1.0,
    "in": 96.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
}

_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))\s*([a-zA-Z%]*)\s*$")


@dataclass(frozen=True)
class SassNumber:
    value: float
    unit: str = ""

    def convert(self, unit: str) -> SassNumber:
        if unit == self.unit:
            return self
        if self.unit in _PX_PER_UNIT and unit in _PX_PER_UNIT:
            return SassNumber(self.value * _PX_PER_UNIT[self.unit] / _PX_PER_UNIT[unit], unit)
        raise UnitMismatchError(self.unit, unit)

    def add(self, other: SassNumber) -> SassNumber:
        """Add `other`, expressed in this number's unit.

        Both operands must carry a unit; offsets without one are rejected with
        `NoUnitError` so callers can ask for e.g. `2px`.
        """
        if not self.unit or not other.unit:
            raise NoUnitError()
        return SassNumber(self.value + other.convert(self.unit).value, self.unit)

    def __add__(self, other: object) -> SassNumber:
        if not isinstance(other, SassNumber):
            return NotImplemented
        return self.add(other)

    def __neg__(self) -> SassNumber:
        return SassNumber(-self.value, self.unit)

    def __str__(self) -> str:
        v = self.value
        text = str(int(v)) if float(v).is_integer() else f"{v:.5f}".rstrip("0").rstrip(".")
        return f"{text}{self.unit}"


def px(value: float) -> SassNumber:
    return SassNumber(value, "px")


def parse_number(text: str) -> SassNumber:
    m = _NUMBER_RE.match(text)
    if not m:
        raise ValueError(f"not a number: {text!r}")
    raw, unit = m.groups()
    value = float(raw)
    return SassNumber(int(value) if value.is_integer() else value, unit.lower())


def unquote(text: str) -> str:
    """Strip one level of matching single or double quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text
