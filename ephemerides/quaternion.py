"""Quaternions for rotations in three-dimensional space.

Vectors are sequences of three floats; rotation matrices are sequences of
three rows of three floats.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

Vector3 = tuple[float, float, float]
Matrix3 = tuple[Vector3, Vector3, Vector3]

_HALF_PI = math.pi / 2.0


def _vec(values: Sequence[float]) -> Vector3:
    if len(values) != 3:
        raise ValueError("A vector must have exactly three components")
    return (float(values[0]), float(values[1]), float(values[2]))


def _dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalized(v: Vector3) -> Vector3:
    length = math.hypot(*v)
    if length == 0 or length == 1:
        return v
    return (v[0] / length, v[1] / length, v[2] / length)


def _clamped_asin_pitch(sinp: float) -> float:
    return math.copysign(_HALF_PI, sinp) if abs(sinp) >= 1.0 else math.asin(sinp)


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A quaternion ``scalar + x*i + y*j + z*k``; the default is the identity."""

    scalar: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def _from_vector(cls, scalar: float, vector: Sequence[float]) -> Quaternion:
        v = _vec(vector)
        return cls(float(scalar), v[0], v[1], v[2])

    @property
    def vector(self) -> Vector3:
        """The vector part ``(x, y, z)``."""
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.scalar
        yield self.x
        yield self.y
        yield self.z

    @staticmethod
    def identity() -> Quaternion:
        """The identity rotation."""
        return Quaternion()

    def is_null(self) -> bool:
        """True when every component is zero."""
        return self.scalar == 0 and self.x == 0 and self.y == 0 and self.z == 0

    def is_identity(self) -> bool:
        """True for exactly ``(1, 0, 0, 0)``."""
        return self.scalar == 1 and self.x == 0 and self.y == 0 and self.z == 0

    def dot(self, other: Quaternion) -> float:
        """Four-dimensional dot product."""
        return (
            self.scalar * other.scalar
            + self.x * other.x
            + self.y * other.y
            + self.z * other.z
        )

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        """Square of the norm."""
        return self.dot(self)

    def normalized(self) -> Quaternion:
        """Unit quaternion in the same direction; a null quaternion stays null."""
        scale = self.length()
        if scale == 1:
            return self
        if scale == 0:
            return Quaternion(0.0, 0.0, 0.0, 0.0)
        return self / scale

    def inverted(self) -> Quaternion:
        """Conjugate divided by the length; null for a null quaternion."""
        length = self.length()
        if length != 0:
            return Quaternion(
                self.scalar / length, -self.x / length, -self.y / length, -self.z / length
            )
        return Quaternion(0.0, 0.0, 0.0, 0.0)

    def conjugated(self) -> Quaternion:
        """The conjugate, with the vector part negated."""
        return Quaternion(self.scalar, -self.x, -self.y, -self.z)

    def rotated_vector(self, vec: Sequence[float]) -> Vector3:
        """Rotate a vector by this (unit) quaternion."""
        return (self * Quaternion._from_vector(0.0, vec) * self.conjugated()).vector

    def axis_and_angle(self) -> tuple[Vector3, float]:
        """Rotation axis (unit vector) and angle in radians.

        For a rotation by a multiple of a full turn the axis is ``(0, 0, 0)``
        and the angle zero.
        """
        length = math.hypot(self.x, self.y, self.z)
        if length > 0:
            if length == 1:
                axis = (self.x, self.y, self.z)
            else:
                axis = (self.x / length, self.y / length, self.z / length)
            angle = 2.0 * math.acos(max(-1.0, min(1.0, self.scalar)))
            return axis, angle
        return (0.0, 0.0, 0.0), 0.0

    @staticmethod
    def from_axis_and_angle(axis: Sequence[float], angle: float) -> Quaternion:
        """Rotation by *angle* radians around *axis*."""
        ax = _normalized(_vec(axis))
        half = angle / 2.0
        s = math.sin(half)
        c = math.cos(half)
        return Quaternion(c, ax[0] * s, ax[1] * s, ax[2] * s).normalized()

    def _unit_components(self) -> tuple[float, float, float, float]:
        length = self.length()
        if length != 1 and length != 0:
            return (self.x / length, self.y / length, self.z / length, self.scalar / length)
        return (self.x, self.y, self.z, self.scalar)

    def euler_angles(self) -> Vector3:
        """Euler angles ``(pitch, yaw, roll)`` in radians."""
        x, y, z, w = self._unit_components()
        xx, xy, xz, xw = x * x, x * y, x * z, x * w
        yy, yz, yw = y * y, y * z, y * w
        zz, zw = z * z, z * w

        pitch = _clamped_asin_pitch(-2.0 * (yz - xw))
        if pitch < _HALF_PI:
            if pitch > -_HALF_PI:
                yaw = math.atan2(2.0 * (xz + yw), 1.0 - 2.0 * (xx + yy))
                roll = math.atan2(2.0 * (xy + zw), 1.0 - 2.0 * (xx + zz))
            else:
                roll = 0.0
                yaw = -math.atan2(-2.0 * (xy - zw), 1.0 - 2.0 * (yy + zz))
        else:
            roll = 0.0
            yaw = math.atan2(-2.0 * (xy - zw), 1.0 - 2.0 * (yy + zz))
        return (pitch, yaw, roll)

    def pitch(self) -> float:
        """Rotation around the x axis, in radians."""
        x, y, z, w = self._unit_components()
        return _clamped_asin_pitch(-2.0 * (y * z - x * w))

    def yaw(self) -> float:
        """Rotation around the y axis, in radians."""
        return self.euler_angles()[1]

    def roll(self) -> float:
        """Rotation around the z axis, in radians; zero at gimbal lock."""
        return self.euler_angles()[2]

    @staticmethod
    def from_euler_angles(pitch: float, yaw: float, roll: float) -> Quaternion:
        """Rotation from Euler angles in radians."""
        c1, s1 = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
        c2, s2 = math.cos(roll * 0.5), math.sin(roll * 0.5)
        c3, s3 = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
        c1c2 = c1 * c2
        s1s2 = s1 * s2
        return Quaternion(
            c1c2 * c3 + s1s2 * s3,
            c1c2 * s3 + s1s2 * c3,
            s1 * c2 * c3 - c1 * s2 * s3,
            c1 * s2 * c3 - s1 * c2 * s3,
        )

    @staticmethod
    def from_pitch(pitch: float) -> Quaternion:
        """Rotation around the x axis."""
        half = pitch * 0.5
        return Quaternion(math.cos(half), math.sin(half), 0.0, 0.0)

    @staticmethod
    def from_yaw(yaw: float) -> Quaternion:
        """Rotation around the y axis."""
        half = yaw * 0.5
        return Quaternion(math.cos(half), 0.0, math.sin(half), 0.0)

    @staticmethod
    def from_roll(roll: float) -> Quaternion:
        """Rotation around the z axis."""
        half = roll * 0.5
        return Quaternion(math.cos(half), 0.0, 0.0, math.sin(half))

    @staticmethod
    def rotation_to(from_vec: Sequence[float], to_vec: Sequence[float]) -> Quaternion:
        """Shortest rotation that turns *from_vec* into the direction of *to_vec*."""
        v0 = _normalized(_vec(from_vec))
        v1 = _normalized(_vec(to_vec))
        d = _dot(v0, v1) + 1.0
        if d == 0:
            # Opposite vectors: any perpendicular axis will do.
            axis = _cross((1.0, 0.0, 0.0), v0)
            if _dot(axis, axis) == 0:
                axis = _cross((0.0, 1.0, 0.0), v0)
            axis = _normalized(axis)
            return Quaternion(0.0, axis[0], axis[1], axis[2])
        d = math.sqrt(2.0 * d)
        c = _cross(v0, v1)
        return Quaternion(d * 0.5, c[0] / d, c[1] / d, c[2] / d).normalized()

    def to_rotation_matrix(self) -> Matrix3:
        """Rotation matrix as three rows."""
        w, x, y, z = self.scalar, self.x, self.y, self.z
        f2x, f2y, f2z = x + x, y + y, z + z
        f2xw, f2yw, f2zw = f2x * w, f2y * w, f2z * w
        f2xx, f2xy, f2xz = f2x * x, f2x * y, f2x * z
        f2yy, f2yz, f2zz = f2y * y, f2y * z, f2z * z
        return (
            (1.0 - (f2yy + f2zz), f2xy - f2zw, f2xz + f2yw),
            (f2xy + f2zw, 1.0 - (f2xx + f2zz), f2yz - f2xw),
            (f2xz - f2yw, f2yz + f2xw, 1.0 - (f2xx + f2yy)),
        )

    @staticmethod
    def from_rotation_matrix(matrix: Sequence[Sequence[float]]) -> Quaternion:
        """Quaternion of a rotation matrix given as three rows."""
        m = [[float(matrix[r][c]) for c in range(3)] for r in range(3)]
        axis = [0.0, 0.0, 0.0]
        trace = m[0][0] + m[1][1] + m[2][2]
        if trace > 0.00000001:
            s = 2.0 * math.sqrt(trace + 1.0)
            scalar = 0.25 * s
            axis[0] = (m[2][1] - m[1][2]) / s
            axis[1] = (m[0][2] - m[2][0]) / s
            axis[2] = (m[1][0] - m[0][1]) / s
        else:
            following = (1, 2, 0)
            i = 0
            if m[1][1] > m[0][0]:
                i = 1
            if m[2][2] > m[i][i]:
                i = 2
            j = following[i]
            k = following[j]
            s = 2.0 * math.sqrt(m[i][i] - m[j][j] - m[k][k] + 1.0)
            axis[i] = 0.25 * s
            scalar = (m[k][j] - m[j][k]) / s
            axis[j] = (m[j][i] + m[i][j]) / s
            axis[k] = (m[k][i] + m[i][k]) / s
        return Quaternion(scalar, axis[0], axis[1], axis[2])

    def axes(self) -> tuple[Vector3, Vector3, Vector3]:
        """Images of the x, y and z axes: the columns of the rotation matrix."""
        m = self.to_rotation_matrix()
        return (
            (m[0][0], m[1][0], m[2][0]),
            (m[0][1], m[1][1], m[2][1]),
            (m[0][2], m[1][2], m[2][2]),
        )

    @staticmethod
    def from_axes(
        x_axis: Sequence[float], y_axis: Sequence[float], z_axis: Sequence[float]
    ) -> Quaternion:
        """Rotation that maps the coordinate axes onto the given axes."""
        xa, ya, za = _vec(x_axis), _vec(y_axis), _vec(z_axis)
        matrix = (
            (xa[0], ya[0], za[0]),
            (xa[1], ya[1], za[1]),
            (xa[2], ya[2], za[2]),
        )
        return Quaternion.from_rotation_matrix(matrix)

    def __add__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(
            self.scalar + other.scalar, self.x + other.x, self.y + other.y, self.z + other.z
        )

    def __sub__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(
            self.scalar - other.scalar, self.x - other.x, self.y - other.y, self.z - other.z
        )

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.scalar, -self.x, -self.y, -self.z)

    def __mul__(self, other: Quaternion | float) -> Quaternion:
        if isinstance(other, Quaternion):
            a, b = self, other
            yy = (a.scalar - a.y) * (b.scalar + b.z)
            zz = (a.scalar + a.y) * (b.scalar - b.z)
            ww = (a.z + a.x) * (b.x + b.y)
            xx = ww + yy + zz
            qq = 0.5 * (xx + (a.z - a.x) * (b.x - b.y))
            return Quaternion(
                qq - ww + (a.z - a.y) * (b.y - b.z),
                qq - xx + (a.x + a.scalar) * (b.x + b.scalar),
                qq - yy + (a.scalar - a.x) * (b.y + b.z),
                qq - zz + (a.z + a.y) * (b.scalar - b.x),
            )
        if isinstance(other, (int, float)):
            return Quaternion(
                self.scalar * other, self.x * other, self.y * other, self.z * other
            )
        return NotImplemented

    def __rmul__(self, factor: float) -> Quaternion:
        if isinstance(factor, (int, float)):
            return self * factor
        return NotImplemented

    def __truediv__(self, divisor: float) -> Quaternion:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Quaternion(
            self.scalar / divisor, self.x / divisor, self.y / divisor, self.z / divisor
        )