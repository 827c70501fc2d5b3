"""Scalar helpers, running statistics and rigid-body rotation tools."""

import math

import numpy as np


def saturation(value, limits):
    """Clamp ``value`` to the interval spanned by the two ``limits`` in any order."""
    low, high = limits[0], limits[1]
    if low > high:
        low, high = high, low
    if value < low:
        return low
    if value > high:
        return high
    return value


def kill_zero_offset(value, limit):
    """Return zero when ``value`` lies strictly inside (-limit, limit)."""
    if -limit < value < limit:
        return type(value)(0)
    return value


def inv_normalize(value, low, high, min_lim=-1.0, max_lim=1.0):
    """Map ``value`` from [min_lim, max_lim] linearly onto [low, high]."""
    return (value - min_lim) * (high - low) / (max_lim - min_lim) + low


def window_func(x, window_ratio, x_range=1.0, y_range=1.0):
    """Trapezoid window: ramps up, holds at ``y_range``, ramps down."""
    if x < 0 or x > x_range:
        raise ValueError(f"x={x} should be within [0, {x_range}]")
    if window_ratio <= 0 or window_ratio >= 0.5:
        raise ValueError(f"window_ratio={window_ratio} should be within (0, 0.5)")

    if x / x_range < window_ratio:
        return x * y_range / (x_range * window_ratio)
    if x / x_range > 1 - window_ratio:
        return y_range * (x_range - x) / (x_range * window_ratio)
    return y_range


def update_average(exp, new_value, n):
    """Return the running mean after adding the ``n``-th sample."""
    exp = np.asarray(exp, dtype=float)
    new_value = np.asarray(new_value, dtype=float)
    if exp.shape[0] != new_value.shape[0]:
        raise ValueError("update_average: sizes of mean and sample differ")
    if abs(n - 1) < 0.001:
        return new_value.copy()
    return exp + (new_value - exp) / n


def update_covariance(cov, exp_past, new_value, n):
    """Return the running population covariance after the ``n``-th sample.

    ``exp_past`` must be the mean of the first ``n - 1`` samples.
    """
    cov = np.asarray(cov, dtype=float)
    exp_past = np.asarray(exp_past, dtype=float)
    new_value = np.asarray(new_value, dtype=float)
    if (
        cov.ndim != 2
        or cov.shape[0] != cov.shape[1]
        or cov.shape[0] != exp_past.shape[0]
        or exp_past.shape[0] != new_value.shape[0]
    ):
        raise ValueError("update_covariance: sizes do not match")
    if abs(n - 1) < 0.1:
        return np.zeros_like(cov)
    diff = new_value - exp_past
    return cov * (n - 1) / n + np.outer(diff, diff) * (n - 1) / (n * n)


def update_avg_cov(cov, exp, new_value, n):
    """Update covariance (with the old mean) and then mean; return ``(cov, exp)``."""
    new_cov = update_covariance(cov, exp, new_value, n)
    new_exp = update_average(exp, new_value, n)
    return new_cov, new_exp


def rotx(theta):
    """Rotation matrix about the x axis."""
    s, c = math.sin(theta), math.cos(theta)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def roty(theta):
    """Rotation matrix about the y axis."""
    s, c = math.sin(theta), math.cos(theta)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rotz(theta):
    """Rotation matrix about the z axis."""
    s, c = math.sin(theta), math.cos(theta)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def skew(v):
    """Skew-symmetric matrix: 2x2 for a scalar, 3x3 for a 3-vector."""
    if np.ndim(v) == 0:
        w = float(v)
        return np.array([[0.0, -w], [w, 0.0]])
    vec = np.asarray(v, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"skew expects a scalar or a 3-vector, got shape {vec.shape}")
    x, y, z = vec
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def rpy_to_rot_mat(roll, pitch, yaw):
    """Rotation matrix Rz(yaw) @ Ry(pitch) @ Rx(roll)."""
    return rotz(yaw) @ roty(pitch) @ rotx(roll)


def rot_mat_to_rpy(rot):
    """Roll, pitch and yaw of a rotation matrix."""
    r = np.asarray(rot, dtype=float)
    return np.array(
        [
            math.atan2(r[2, 1], r[2, 2]),
            float(np.arcsin(-r[2, 0])),
            math.atan2(r[1, 0], r[0, 0]),
        ]
    )


def quat_to_rot_mat(q):
    """Rotation matrix of a quaternion given as (w, x, y, z)."""
    e0, e1, e2, e3 = (float(c) for c in np.asarray(q, dtype=float))
    return np.array(
        [
            [1 - 2 * (e2 * e2 + e3 * e3), 2 * (e1 * e2 - e0 * e3), 2 * (e1 * e3 + e0 * e2)],
            [2 * (e1 * e2 + e0 * e3), 1 - 2 * (e1 * e1 + e3 * e3), 2 * (e2 * e3 - e0 * e1)],
            [2 * (e1 * e3 - e0 * e2), 2 * (e2 * e3 + e0 * e1), 1 - 2 * (e1 * e1 + e2 * e2)],
        ]
    )


def rot_mat_to_exp(rot):
    """Exponential coordinates (axis times angle) of a rotation matrix."""
    rm = np.asarray(rot, dtype=float)
    diagonal_sum = rm[0, 0] + rm[1, 1] + rm[2, 2]
    cos_value = min(max(diagonal_sum / 2.0 - 0.5, -1.0), 1.0)
    angle = math.acos(cos_value)
    if abs(angle) < 1e-5:
        return np.zeros(3)
    if abs(angle - math.pi) < 1e-5:
        axis = np.array([rm[0, 0] + 1, rm[0, 1], rm[0, 2]])
        return angle * axis / math.sqrt(2 * (1 + rm[0, 0]))
    axis = np.array([rm[2, 1] - rm[1, 2], rm[0, 2] - rm[2, 0], rm[1, 0] - rm[0, 1]])
    return angle / (2.0 * math.sin(angle)) * axis


def homo_matrix(p, rotation):
    """4x4 homogeneous transform from a translation and a rotation.

    ``rotation`` is either a 3x3 rotation matrix or a (w, x, y, z) quaternion.
    """
    rot = np.asarray(rotation, dtype=float)
    if rot.shape == (4,):
        rot = quat_to_rot_mat(rot)
    elif rot.shape != (3, 3):
        raise ValueError(f"rotation must be 3x3 or a quaternion, got shape {rot.shape}")
    homo = np.zeros((4, 4))
    homo[:3, :3] = rot
    homo[:3, 3] = np.asarray(p, dtype=float)
    homo[3, 3] = 1.0
    return homo


def homo_matrix_inverse(homo):
    """Inverse of a homogeneous rigid transform."""
    h = np.asarray(homo, dtype=float)
    rot_t = h[:3, :3].T
    inv = np.zeros((4, 4))
    inv[:3, :3] = rot_t
    inv[:3, 3] = -rot_t @ h[:3, 3]
    inv[3, 3] = 1.0
    return inv


def homo_vec(v3):
    """Append a trailing 1 to a 3-vector."""
    return np.append(np.asarray(v3, dtype=float)[:3], 1.0)


def no_homo_vec(v4):
    """Drop the trailing element of a homogeneous 4-vector."""
    return np.asarray(v4, dtype=float)[:3].copy()


class AvgCov:
    """Running mean and covariance of a signal, reported periodically.

    The first ``wait_count`` samples are ignored; afterwards every sample
    updates the statistics, and every ``show_period``-th sample prints them
    scaled by ``zoom_factor``.
    """

    def __init__(
        self,
        size,
        name,
        avg_only=False,
        show_period=1000,
        wait_count=5000,
        zoom_factor=10000,
    ):
        self.size = size
        self.name = name
        self.avg_only = avg_only
        self.show_period = show_period
        self.wait_count = wait_count
        self.zoom_factor = zoom_factor
        self.exp = np.zeros(size)
        self.cov = np.zeros((size, size))
        self.measure_count = 0

    def measure(self, new_value):
        """Add one sample."""
        self.measure_count += 1
        if self.measure_count <= self.wait_count:
            return
        n = self.measure_count - self.wait_count
        self.cov, self.exp = update_avg_cov(self.cov, self.exp, new_value, n)
        if self.measure_count % self.show_period == 0:
            print(f"******{self.name} measured count: {n}******")
            print(f"{self.zoom_factor} Times Average of {self.name}")
            print(np.array2string(self.zoom_factor * self.exp))
            if not self.avg_only:
                print(f"{self.zoom_factor} Times Covariance of {self.name}")
                print(np.array2string(self.zoom_factor * self.cov))