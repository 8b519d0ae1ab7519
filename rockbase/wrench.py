"""Force and torque applied at a point."""

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
class Wrench:
    """Force (N) and torque (Nm); NaN by default."""

    force: np.ndarray = field(default_factory=_nan_vector)
    torque: np.ndarray = field(default_factory=_nan_vector)

    def __post_init__(self) -> None:
        self.force = _as_vector(self.force)
        self.torque = _as_vector(self.torque)

    def set_nan(self) -> None:
        self.force[:] = np.nan
        self.torque[:] = np.nan

    def set_zero(self) -> None:
        self.force[:] = 0.0
        self.torque[:] = 0.0

    def is_valid(self) -> bool:
        """Return False if any entry is NaN."""
        return not (np.isnan(self.force).any() or np.isnan(self.torque).any())

    def __add__(self, other: Wrench) -> Wrench:
        if not isinstance(other, Wrench):
            return NotImplemented
        return Wrench(self.force + other.force, self.torque + other.torque)

    def __sub__(self, other: Wrench) -> Wrench:
        if not isinstance(other, Wrench):
            return NotImplemented
        return Wrench(self.force - other.force, self.torque - other.torque)