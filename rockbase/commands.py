"""Command structures for motion controllers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from rockbase.timestamp import Time


def _unset_vector() -> np.ndarray:
    return np.full(3, np.nan)


@dataclass(eq=False)
class LinearAngular6DCommand:
    """Command with a linear (x, y, z) and angular (roll, pitch, yaw) part.

    Unset components are NaN.
    """

    time: Time = field(default_factory=Time)
    linear: np.ndarray = field(default_factory=_unset_vector)
    angular: np.ndarray = field(default_factory=_unset_vector)

    def __post_init__(self) -> None:
        self.linear = np.array(self.linear, dtype=float)
        self.angular = np.array(self.angular, dtype=float)
        for name, vector in (("linear", self.linear), ("angular", self.angular)):
            if vector.shape != (3,):
                raise ValueError(f"{name} must be a 3-vector, got shape {vector.shape}")

    @property
    def x(self) -> float:
        return float(self.linear[0])

    @x.setter
    def x(self, value: float) -> None:
        self.linear[0] = value

    @property
    def y(self) -> float:
        return float(self.linear[1])

    @y.setter
    def y(self, value: float) -> None:
        self.linear[1] = value

    @property
    def z(self) -> float:
        return float(self.linear[2])

    @z.setter
    def z(self, value: float) -> None:
        self.linear[2] = value

    @property
    def roll(self) -> float:
        return float(self.angular[0])

    @roll.setter
    def roll(self, value: float) -> None:
        self.angular[0] = value

    @property
    def pitch(self) -> float:
        return float(self.angular[1])

    @pitch.setter
    def pitch(self, value: float) -> None:
        self.angular[1] = value

    @property
    def yaw(self) -> float:
        return float(self.angular[2])

    @yaw.setter
    def yaw(self, value: float) -> None:
        self.angular[2] = value


@dataclass
class Motion2D:
    """Motion command for differential-drive robots.

    ``translation`` in m/s, ``rotation`` in rad/s and ``heading`` in rad;
    positive rotation and heading are counter-clockwise.
    """

    translation: float = 0.0
    rotation: float = 0.0
    heading: float = 0.0


@dataclass
class Speed6D:
    """Speed command for 6-dof vehicles, in m/s and rad/s."""

    surge: float = 0.0
    sway: float = 0.0
    heave: float = 0.0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0