"""Twists (linear and angular velocity) with a 6x6 uncertainty."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real

import numpy as np

from rockbase.transform_with_covariance import skew_symmetric


def _as_array(value, shape: tuple[int, ...], name: str) -> np.ndarray:
    array = np.array(value, dtype=float)
    if array.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {array.shape}")
    return array


def _nan_cov() -> np.ndarray:
    return np.full((6, 6), np.nan)


def _zero_vector() -> np.ndarray:
    return np.zeros(3)


def _make_spd(matrix: np.ndarray) -> np.ndarray:
    """Return the symmetric part of ``matrix`` with negative eigenvalues clamped to zero."""
    symmetric = 0.5 * (matrix + matrix.T)
    eigenvalues, eigenvectors = np.linalg.eigh(symmetric)
    eigenvalues = np.clip(eigenvalues, 0.0, None)
    result = eigenvectors @ np.diag(eigenvalues) @ eigenvectors.T
    return 0.5 * (result + result.T)


def cross_jacobian(u, v) -> np.ndarray:
    """Return the 3x6 matrix ``[skew(u) skew(v)]``."""
    u = _as_array(u, (3,), "u")
    v = _as_array(v, (3,), "v")
    return np.hstack((skew_symmetric(u), skew_symmetric(v)))


def _block_diag(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    zero = np.zeros((3, 3))
    return np.block([[a, zero], [zero, b]])


@dataclass(eq=False)
class TwistWithCovariance:
    """Linear velocity ``vel`` (m/s), rotation rate ``rot`` (rad/s) and covariance.

    A covariance holding a non-finite value means no uncertainty is known.
    """

    vel: np.ndarray = field(default_factory=_zero_vector)
    rot: np.ndarray = field(default_factory=_zero_vector)
    cov: np.ndarray = field(default_factory=_nan_cov)

    def __post_init__(self) -> None:
        self.vel = _as_array(self.vel, (3,), "vel")
        self.rot = _as_array(self.rot, (3,), "rot")
        self.cov = _as_array(self.cov, (6, 6), "cov")

    @classmethod
    def from_velocity(cls, velocity, cov) -> TwistWithCovariance:
        """Build from a 6-vector ``[linear angular]`` and a 6x6 covariance."""
        velocity = _as_array(velocity, (6,), "velocity")
        return cls(velocity[:3], velocity[3:], cov)

    @classmethod
    def zero(cls) -> TwistWithCovariance:
        """Return a twist with zero velocities and unknown covariance."""
        return cls()

    @property
    def velocity(self) -> np.ndarray:
        """The 6-vector ``[linear angular]``."""
        return np.concatenate((self.vel, self.rot))

    @velocity.setter
    def velocity(self, value) -> None:
        value = _as_array(value, (6,), "velocity")
        self.vel = value[:3].copy()
        self.rot = value[3:].copy()

    @property
    def linear_velocity_cov(self) -> np.ndarray:
        """The top-left 3x3 block of the covariance."""
        return self.cov[:3, :3].copy()

    @linear_velocity_cov.setter
    def linear_velocity_cov(self, value) -> None:
        self.cov[:3, :3] = _as_array(value, (3, 3), "linear_velocity_cov")

    @property
    def angular_velocity_cov(self) -> np.ndarray:
        """The bottom-right 3x3 block of the covariance."""
        return self.cov[3:, 3:].copy()

    @angular_velocity_cov.setter
    def angular_velocity_cov(self, value) -> None:
        self.cov[3:, 3:] = _as_array(value, (3, 3), "angular_velocity_cov")

    def has_valid_velocity(self) -> bool:
        return bool(np.isfinite(self.vel).all() and np.isfinite(self.rot).all())

    def invalidate_velocity(self) -> None:
        self.vel = np.full(3, np.nan)
        self.rot = np.full(3, np.nan)

    def has_valid_covariance(self) -> bool:
        return bool(np.isfinite(self.cov).all())

    def invalidate_covariance(self) -> None:
        self.cov = _nan_cov()

    def invalidate(self) -> None:
        self.invalidate_velocity()
        self.invalidate_covariance()

    @staticmethod
    def _check_index(index: int) -> int:
        index = int(index)
        if not 0 <= index < 6:
            raise IndexError(f"twist index {index} out of range [0, 6)")
        return index

    def __getitem__(self, index: int) -> float:
        index = self._check_index(index)
        if index < 3:
            return float(self.vel[index])
        return float(self.rot[index - 3])

    def __setitem__(self, index: int, value: float) -> None:
        index = self._check_index(index)
        if index < 3:
            self.vel[index] = value
        else:
            self.rot[index - 3] = value

    def _copy(self) -> TwistWithCovariance:
        return TwistWithCovariance(self.vel, self.rot, self.cov)

    def __iadd__(self, other: TwistWithCovariance) -> TwistWithCovariance:
        if not isinstance(other, TwistWithCovariance):
            return NotImplemented
        self.vel = self.vel + other.vel
        self.rot = self.rot + other.rot
        if self.has_valid_covariance() and other.has_valid_covariance():
            self.cov = _make_spd(self.cov + other.cov)
        return self

    def __add__(self, other: TwistWithCovariance) -> TwistWithCovariance:
        if not isinstance(other, TwistWithCovariance):
            return NotImplemented
        result = self._copy()
        result += other
        return result

    def __isub__(self, other: TwistWithCovariance) -> TwistWithCovariance:
        if not isinstance(other, TwistWithCovariance):
            return NotImplemented
        self.vel = self.vel - other.vel
        self.rot = self.rot - other.rot
        # Uncertainties add up whatever the sign of the operation.
        if self.has_valid_covariance() and other.has_valid_covariance():
            self.cov = _make_spd(self.cov + other.cov)
        return self

    def __sub__(self, other: TwistWithCovariance) -> TwistWithCovariance:
        if not isinstance(other, TwistWithCovariance):
            return NotImplemented
        result = self._copy()
        result -= other
        return result

    def _scaled(self, factor: float) -> TwistWithCovariance:
        factor = float(factor)
        if not self.has_valid_covariance():
            return TwistWithCovariance(self.vel * factor, self.rot * factor)
        return TwistWithCovariance(
            self.vel * factor, self.rot * factor, (factor * factor) * self.cov
        )

    def _cross(self, other: TwistWithCovariance) -> TwistWithCovariance:
        result = TwistWithCovariance(
            np.cross(self.rot, other.vel) + np.cross(self.vel, other.rot),
            np.cross(self.rot, other.rot),
        )
        if self.has_valid_covariance() and other.has_valid_covariance():
            cov = np.zeros((6, 6))
            jac = cross_jacobian(self.rot, other.vel)
            block = _block_diag(self.cov[3:, 3:], other.cov[:3, :3])
            cov[:3, :3] = jac @ block @ jac.T
            jac = cross_jacobian(self.vel, other.rot)
            block = _block_diag(self.cov[:3, :3], other.cov[3:, 3:])
            cov[:3, :3] += jac @ block @ jac.T
            jac = cross_jacobian(self.rot, other.rot)
            block = _block_diag(self.cov[3:, 3:], other.cov[3:, 3:])
            cov[3:, 3:] = jac @ block @ jac.T
            result.cov = _make_spd(cov)
        return result

    def __mul__(self, other) -> TwistWithCovariance:
        """Scale by a number, or take the spatial cross product with another twist."""
        if isinstance(other, TwistWithCovariance):
            return self._cross(other)
        if isinstance(other, Real):
            return self._scaled(other)
        return NotImplemented

    def __rmul__(self, factor) -> TwistWithCovariance:
        if not isinstance(factor, Real):
            return NotImplemented
        return self._scaled(factor)

    def __truediv__(self, divisor) -> TwistWithCovariance:
        if not isinstance(divisor, Real):
            return NotImplemented
        divisor = float(divisor)
        return TwistWithCovariance(
            self.vel / divisor,
            self.rot / divisor,
            (1.0 / (divisor * divisor)) * self.cov,
        )

    def __neg__(self) -> TwistWithCovariance:
        return TwistWithCovariance(-self.vel, -self.rot, self.cov)

    def __str__(self) -> str:
        lines = []
        for value, row in zip(self.velocity, self.cov):
            cells = "".join(f"{c:.5f}\t" for c in row)
            lines.append(f"{value:.5f}\t|{cells}\n")
        return "".join(lines)