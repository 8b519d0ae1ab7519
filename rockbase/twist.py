"""Spatial velocity of a rigid body."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _nan_vector() -> np.ndarray:
    return np.full(3, np.nan)


def _as_vector(value) -> np.ndarray:
    vector = np.array(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {vector.shape}")
    return vector


@dataclass(eq=False)
class Twist:
    """Linear velocity (m/s) and angular velocity (rad/s); NaN by default."""

    linear: np.ndarray = field(default_factory=_nan_vector)
    angular: np.ndarray = field(default_factory=_nan_vector)

    def __post_init__(self) -> None:
        self.linear = _as_vector(self.linear)
        self.angular = _as_vector(self.angular)

    def set_nan(self) -> None:
        self.linear[:] = np.nan
        self.angular[:] = np.nan

    def set_zero(self) -> None:
        self.linear[:] = 0.0
        self.angular[:] = 0.0

    def is_valid(self) -> bool:
        """Return False if any entry is NaN."""
        return not (np.isnan(self.linear).any() or np.isnan(self.angular).any())

    def __add__(self, other: Twist) -> Twist:
        if not isinstance(other, Twist):
            return NotImplemented
        return Twist(self.linear + other.linear, self.angular + other.angular)

    def __sub__(self, other: Twist) -> Twist:
        if not isinstance(other, Twist):
            return NotImplemented
        return Twist(self.linear - other.linear, self.angular - other.angular)