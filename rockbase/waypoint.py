"""Positions associated with a heading."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _unit_x() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0])


@dataclass(eq=False)
class Waypoint:
    """A 3D position with a heading in radians and tolerances.

    The position defaults to (1, 0, 0); all other values default to zero.
    """

    position: np.ndarray = field(default_factory=_unit_x)
    heading: float = 0.0
    tol_position: float = 0.0
    tol_heading: float = 0.0

    def __post_init__(self) -> None:
        position = np.array(self.position, dtype=float)
        if position.shape != (3,):
            raise ValueError(f"expected a 3-vector, got shape {position.shape}")
        self.position = position

    def has_valid_position(self) -> bool:
        """Return True if every coordinate is finite."""
        return bool(np.isfinite(self.position).all())

    @classmethod
    def unknown(cls) -> Waypoint:
        """Return a waypoint whose values are all unknown (NaN)."""
        return cls(np.full(3, np.nan), math.nan, math.nan, math.nan)