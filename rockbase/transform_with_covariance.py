"""3D rigid transformations with an optional 6x6 uncertainty.

Quaternions are numpy arrays in ``(w, x, y, z)`` order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

_IDENTITY3 = np.eye(3)
_ZERO3 = np.zeros((3, 3))


def _as_array(value, shape: tuple[int, ...], name: str) -> np.ndarray:
    array = np.array(value, dtype=float)
    if array.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {array.shape}")
    return array


def quaternion_multiply(q1, q2) -> np.ndarray:
    """Return the Hamilton product ``q1 * q2``."""
    w1, x1, y1, z1 = np.asarray(q1, dtype=float)
    w2, x2, y2, z2 = np.asarray(q2, dtype=float)
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def quaternion_inverse(q) -> np.ndarray:
    """Return the inverse of ``q`` (conjugate divided by squared norm)."""
    q = np.asarray(q, dtype=float)
    conjugate = np.array([q[0], -q[1], -q[2], -q[3]])
    return conjugate / float(q @ q)


def quaternion_rotate(q, v) -> np.ndarray:
    """Rotate the 3-vector ``v`` by the unit quaternion ``q``."""
    q = np.asarray(q, dtype=float)
    v = np.asarray(v, dtype=float)
    vec = q[1:]
    uv = np.cross(vec, v)
    uv = uv + uv
    return v + q[0] * uv + np.cross(vec, uv)


def quaternion_to_matrix(q) -> np.ndarray:
    """Return the 3x3 rotation matrix of ``q``."""
    w, x, y, z = np.asarray(q, dtype=float)
    tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return np.array([
        [1.0 - (tyy + tzz), txy - twz, txz + twy],
        [txy + twz, 1.0 - (txx + tzz), tyz - twx],
        [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
    ])


def matrix_to_quaternion(m) -> np.ndarray:
    """Return the quaternion of the 3x3 rotation matrix ``m``."""
    m = np.asarray(m, dtype=float)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        t = np.sqrt(trace + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return np.array([
            w,
            (m[2, 1] - m[1, 2]) * t,
            (m[0, 2] - m[2, 0]) * t,
            (m[1, 0] - m[0, 1]) * t,
        ])
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = np.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    vec = np.zeros(3)
    vec[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    vec[j] = (m[j, i] + m[i, j]) * t
    vec[k] = (m[k, i] + m[i, k]) * t
    return np.array([w, vec[0], vec[1], vec[2]])


def r_to_q(r) -> np.ndarray:
    """Convert a scaled rotation axis into a quaternion."""
    r = np.asarray(r, dtype=float)
    theta = float(np.linalg.norm(r))
    if abs(theta) > 1e-5:
        axis = r / theta
        return np.concatenate(([np.cos(theta / 2.0)], np.sin(theta / 2.0) * axis))
    return np.array([1.0, 0.0, 0.0, 0.0])


def q_to_r(q) -> np.ndarray:
    """Convert a quaternion into a scaled rotation axis."""
    q = np.asarray(q, dtype=float)
    vec = q[1:]
    n = float(np.linalg.norm(vec))
    if n == 0.0:
        return np.zeros(3)
    angle = 2.0 * np.arctan2(n, abs(q[0]))
    if q[0] < 0.0:
        n = -n
    return vec / n * angle


def skew_symmetric(r) -> np.ndarray:
    """Return the cross-product matrix of ``r``."""
    x, y, z = np.asarray(r, dtype=float)
    return np.array([
        [0.0, -z, y],
        [z, 0.0, -x],
        [-y, x, 0.0],
    ])


def _dq_by_dr(q: np.ndarray) -> np.ndarray:
    r = q_to_r(q)
    theta = float(np.linalg.norm(r))
    kappa = 0.5 - theta * theta / 48.0
    lam = 1.0 / 24.0 * (1.0 - theta * theta / 40.0)
    return np.vstack((-q[1:] / 2.0, kappa * _IDENTITY3 - lam * np.outer(r, r)))


def _dr_by_dq(q: np.ndarray) -> np.ndarray:
    vec = q[1:]
    mu = float(np.linalg.norm(vec))
    # A zero scalar part counts as negative.
    sign = 1.0 if q[0] > 0.0 else -1.0
    tau = 2.0 * sign * (1.0 + mu * mu / 6.0)
    nu = -2.0 * sign * (2.0 / 3.0 + mu * mu / 5.0)
    return np.hstack(((-2.0 * vec).reshape(3, 1), tau * _IDENTITY3 + nu * np.outer(vec, vec)))


def _dq2q1_by_dq1(q2: np.ndarray) -> np.ndarray:
    vec = q2[1:]
    res = np.zeros((4, 4))
    res[0, 1:] = -vec
    res[1:, 0] = vec
    res[1:, 1:] = skew_symmetric(vec)
    return np.eye(4) * q2[0] + res


def _dq2q1_by_dq2(q1: np.ndarray) -> np.ndarray:
    vec = q1[1:]
    res = np.zeros((4, 4))
    res[0, 1:] = -vec
    res[1:, 0] = vec
    res[1:, 1:] = -skew_symmetric(vec)
    return np.eye(4) * q1[0] + res


def _dr2r1_by_r1(q: np.ndarray, q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    return _dr_by_dq(q) @ _dq2q1_by_dq1(q2) @ _dq_by_dr(q1)


def _dr2r1_by_r2(q: np.ndarray, q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    return _dr_by_dq(q) @ _dq2q1_by_dq2(q1) @ _dq_by_dr(q2)


def _drx_by_dr(q: np.ndarray, x: np.ndarray) -> np.ndarray:
    r = q_to_r(q)
    theta = float(np.linalg.norm(r))
    alpha = 1.0 - theta * theta / 6.0
    beta = 0.5 - theta * theta / 24.0
    gamma = 1.0 / 3.0 - theta * theta / 30.0
    delta = -1.0 / 12.0 + theta * theta / 180.0
    rr = np.outer(r, r)
    sx = skew_symmetric(x)
    sr = skew_symmetric(r)
    return (
        -sx @ (gamma * rr - beta * sr + alpha * _IDENTITY3)
        - sr @ sx @ (delta * rr + 2.0 * beta * _IDENTITY3)
    )


def _rotation_of(linear: np.ndarray) -> np.ndarray:
    """Extract the rotation part of a linear map by polar decomposition."""
    u, _, vt = np.linalg.svd(linear)
    correction = np.eye(3)
    correction[2, 2] = np.sign(np.linalg.det(u @ vt)) or 1.0
    return u @ correction @ vt


def _nan_cov() -> np.ndarray:
    return np.full((6, 6), np.nan)


def _identity_quaternion() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0, 0.0])


@dataclass(eq=False)
class TransformWithCovariance:
    """A transform ``[translation orientation]`` with a 6x6 covariance.

    The covariance is that of the ``[t r]`` error, with ``r`` a scaled
    rotation axis. A covariance holding NaN means no uncertainty is known.
    """

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=_identity_quaternion)
    cov: np.ndarray = field(default_factory=_nan_cov)

    def __post_init__(self) -> None:
        self.translation = _as_array(self.translation, (3,), "translation")
        self.orientation = _as_array(self.orientation, (4,), "orientation")
        self.cov = _as_array(self.cov, (6, 6), "cov")

    @classmethod
    def identity(cls) -> TransformWithCovariance:
        """Return the identity transform without uncertainty."""
        return cls()

    @classmethod
    def from_affine(cls, transform, cov=None) -> TransformWithCovariance:
        """Build from a 4x4 (or 3x4) affine matrix and an optional covariance."""
        result = cls(cov=_nan_cov() if cov is None else cov)
        result.transform = transform
        return result

    @property
    def transform(self) -> np.ndarray:
        """The 4x4 homogeneous matrix of this transform."""
        matrix = np.eye(4)
        matrix[:3, :3] = quaternion_to_matrix(self.orientation)
        matrix[:3, 3] = self.translation
        return matrix

    @transform.setter
    def transform(self, value) -> None:
        matrix = np.asarray(value, dtype=float)
        if matrix.shape not in ((4, 4), (3, 4)):
            raise ValueError(f"affine transform must be 4x4 or 3x4, got {matrix.shape}")
        self.translation = matrix[:3, 3].copy()
        self.orientation = matrix_to_quaternion(_rotation_of(matrix[:3, :3]))

    @property
    def translation_cov(self) -> np.ndarray:
        """The top-left 3x3 block of the covariance."""
        return self.cov[:3, :3].copy()

    @translation_cov.setter
    def translation_cov(self, value) -> None:
        self.cov[:3, :3] = _as_array(value, (3, 3), "translation_cov")

    @property
    def orientation_cov(self) -> np.ndarray:
        """The bottom-right 3x3 block of the covariance."""
        return self.cov[3:, 3:].copy()

    @orientation_cov.setter
    def orientation_cov(self, value) -> None:
        self.cov[3:, 3:] = _as_array(value, (3, 3), "orientation_cov")

    def has_valid_transform(self) -> bool:
        return not (np.isnan(self.translation).any() or np.isnan(self.orientation).any())

    def invalidate_transform(self) -> None:
        self.translation = np.full(3, np.nan)
        self.orientation = np.full(4, np.nan)

    def has_valid_covariance(self) -> bool:
        return not np.isnan(self.cov).any()

    def invalidate_covariance(self) -> None:
        self.cov = _nan_cov()

    def composition(self, other: TransformWithCovariance) -> TransformWithCovariance:
        """Return ``self * other``."""
        return self * other

    def __mul__(self, other: TransformWithCovariance) -> TransformWithCovariance:
        if not isinstance(other, TransformWithCovariance):
            return NotImplemented
        t2, t1 = self, other
        q = quaternion_multiply(t2.orientation, t1.orientation)
        p = t2.translation + quaternion_rotate(t2.orientation, t1.translation)

        t1_valid = t1.has_valid_covariance()
        t2_valid = t2.has_valid_covariance()
        if not t1_valid and not t2_valid:
            return TransformWithCovariance(p, q)

        q1, q2 = t1.orientation, t2.orientation
        cov = np.zeros((6, 6))
        if t1_valid:
            j1 = np.block([
                [quaternion_to_matrix(q2), _ZERO3],
                [_ZERO3, _dr2r1_by_r1(q, q1, q2)],
            ])
            cov += j1 @ t1.cov @ j1.T
        if t2_valid:
            j2 = np.block([
                [_IDENTITY3, _drx_by_dr(q2, t1.translation)],
                [_ZERO3, _dr2r1_by_r2(q, q1, q2)],
            ])
            cov += j2 @ t2.cov @ j2.T
        return TransformWithCovariance(p, q, cov)

    def composition_inv(self, other: TransformWithCovariance) -> TransformWithCovariance:
        """Return ``result`` such that ``result * other == self``."""
        tf, t1 = self, other
        q1_inv = quaternion_inverse(t1.orientation)
        t1_inv_translation = -quaternion_rotate(q1_inv, t1.translation)
        p2 = tf.translation + quaternion_rotate(tf.orientation, t1_inv_translation)
        q2 = quaternion_multiply(tf.orientation, q1_inv)

        if not t1.has_valid_covariance() and not tf.has_valid_covariance():
            return TransformWithCovariance(p2, q2)

        q1 = t1.orientation
        q = quaternion_multiply(q2, q1)
        j1 = np.block([
            [quaternion_to_matrix(q2), _ZERO3],
            [_ZERO3, _dr2r1_by_r1(q, q1, q2)],
        ])
        j2 = np.block([
            [_IDENTITY3, _drx_by_dr(q2, t1.translation)],
            [_ZERO3, _dr2r1_by_r2(q, q1, q2)],
        ])
        cov = (
            np.linalg.inv(j2)
            @ (tf.cov - j1 @ t1.cov @ j1.T)
            @ np.linalg.inv(j2.T)
        )
        return TransformWithCovariance(p2, q2, cov)

    def pre_composition_inv(self, other: TransformWithCovariance) -> TransformWithCovariance:
        """Return ``result`` such that ``other * result == self``."""
        tf, t2 = self, other
        q2_inv = quaternion_inverse(t2.orientation)
        t2_inv_translation = -quaternion_rotate(q2_inv, t2.translation)
        p1 = t2_inv_translation + quaternion_rotate(q2_inv, tf.translation)
        q1 = quaternion_multiply(q2_inv, tf.orientation)

        if not t2.has_valid_covariance() and not tf.has_valid_covariance():
            return TransformWithCovariance(p1, q1)

        q2 = t2.orientation
        q = quaternion_multiply(q2, q1)
        j1 = np.block([
            [quaternion_to_matrix(q2), _ZERO3],
            [_ZERO3, _dr2r1_by_r1(q, q1, q2)],
        ])
        j2 = np.block([
            [_IDENTITY3, _drx_by_dr(q2, p1)],
            [_ZERO3, _dr2r1_by_r2(q, q1, q2)],
        ])
        cov = (
            np.linalg.inv(j1)
            @ (tf.cov - j2 @ t2.cov @ j2.T)
            @ np.linalg.inv(j1.T)
        )
        return TransformWithCovariance(p1, q1, cov)

    def compose_point_with_covariance(self, point, cov) -> tuple[np.ndarray, np.ndarray]:
        """Transform a point with a 3x3 covariance; return ``(point, covariance)``."""
        point = _as_array(point, (3,), "point")
        cov = _as_array(cov, (3, 3), "cov")
        matrix = self.transform
        rotation = matrix[:3, :3]
        q = matrix_to_quaternion(rotation)
        jacobian = np.hstack((_IDENTITY3, _drx_by_dr(q, point)))
        point_cov = jacobian @ self.cov @ jacobian.T + rotation @ cov @ rotation.T
        return rotation @ point + matrix[:3, 3], point_cov

    def inverse(self) -> TransformWithCovariance:
        """Return the inverse transform, with its covariance when known."""
        q_inv = quaternion_inverse(self.orientation)
        translation = -quaternion_rotate(q_inv, self.translation)
        if not self.has_valid_covariance():
            return TransformWithCovariance(translation, q_inv)
        jacobian = np.block([
            [quaternion_to_matrix(self.orientation).T, _drx_by_dr(q_inv, self.translation)],
            [_ZERO3, _IDENTITY3],
        ])
        return TransformWithCovariance(translation, q_inv, jacobian @ self.cov @ jacobian.T)

    def __str__(self) -> str:
        scaled_axis = q_to_r(self.orientation)
        pose = np.concatenate((self.translation, scaled_axis))
        lines = []
        for value, row in zip(pose, self.cov):
            cells = "".join(f"{c:.5f}\t" for c in row)
            lines.append(f"{value:.5f}\t|{cells}\n")
        return "".join(lines)