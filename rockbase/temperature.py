"""Temperatures with a canonical representation in kelvin."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

_ZERO_CELSIUS_IN_KELVIN = 273.15


def kelvin_to_celsius(kelvin: float) -> float:
    """Convert a temperature in kelvin to degrees Celsius."""
    return kelvin - _ZERO_CELSIUS_IN_KELVIN


def celsius_to_kelvin(celsius: float) -> float:
    """Convert a temperature in degrees Celsius to kelvin."""
    return celsius + _ZERO_CELSIUS_IN_KELVIN


@dataclass(eq=False)
class Temperature:
    """A temperature stored in kelvin; unknown (NaN) by default."""

    kelvin: float = math.nan

    @classmethod
    def from_kelvin(cls, kelvin: float) -> Temperature:
        return cls(float(kelvin))

    @classmethod
    def from_celsius(cls, celsius: float) -> Temperature:
        return cls(celsius_to_kelvin(float(celsius)))

    @property
    def celsius(self) -> float:
        """The temperature in degrees Celsius."""
        return kelvin_to_celsius(self.kelvin)

    def is_approx(self, other: Temperature, prec: float = 1e-5) -> bool:
        """Return True if both temperatures differ by less than ``prec`` kelvin."""
        return abs(other.kelvin - self.kelvin) < prec

    def is_in_range(self, left_limit: Temperature, right_limit: Temperature) -> bool:
        """Return True if this temperature lies between the limits, in either order."""
        low, high = left_limit.kelvin, right_limit.kelvin
        if low > high:
            low, high = high, low
        return low <= self.kelvin <= high

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Temperature):
            return NotImplemented
        return self.kelvin == other.kelvin

    def __hash__(self) -> int:
        return hash(self.kelvin)

    def __lt__(self, other: Temperature) -> bool:
        if not isinstance(other, Temperature):
            return NotImplemented
        return self.kelvin < other.kelvin

    def __gt__(self, other: Temperature) -> bool:
        if not isinstance(other, Temperature):
            return NotImplemented
        return self.kelvin > other.kelvin

    def __add__(self, other: Temperature) -> Temperature:
        if not isinstance(other, Temperature):
            return NotImplemented
        return Temperature.from_kelvin(self.kelvin + other.kelvin)

    def __sub__(self, other: Temperature) -> Temperature:
        if not isinstance(other, Temperature):
            return NotImplemented
        return Temperature.from_kelvin(self.kelvin - other.kelvin)

    def __mul__(self, factor: float) -> Temperature:
        if not isinstance(factor, Real):
            return NotImplemented
        return Temperature.from_kelvin(self.kelvin * factor)

    def __rmul__(self, factor: float) -> Temperature:
        if not isinstance(factor, Real):
            return NotImplemented
        return Temperature.from_kelvin(factor * self.kelvin)

    def __str__(self) -> str:
        return f"[{self.celsius:3.1f} celsius]"