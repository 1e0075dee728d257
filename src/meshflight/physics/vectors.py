"""3D vector and rotation primitives.

Vector3 is a small mutable value type used at every API boundary of the
physics package. Bulk work over mesh vertices uses numpy arrays directly;
to_array()/from_array() convert between the two.

Typical usage example:
    from meshflight.physics.vectors import Vector3, rotation_matrix

    v = Vector3(1.0, 0.0, 0.0)
    r = rotation_matrix(Vector3(0.0, 1.0, 0.0), math.pi / 2)
    rotated = Vector3.from_array(r @ v.to_array())
"""

import math
from dataclasses import dataclass

import numpy as np

# Lengths below this are treated as zero when normalizing
EPSILON = 1e-12


@dataclass
class Vector2:
    """Surface (texture) coordinate."""

    u: float = 0.0
    v: float = 0.0

    def to_tuple(self) -> tuple[float, float]:
        return (self.u, self.v)


@dataclass
class Vector3:
    """Three-component vector of floats.

    Arithmetic operators return new vectors; components may be assigned
    directly (e.g. ``velocity.y = 0.0``).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Vector3":
        """Create a vector from any length-3 sequence or numpy array."""
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def copy(self) -> "Vector3":
        return Vector3(self.x, self.y, self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> "Vector3":
        return self * scalar

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalized(self) -> "Vector3":
        """Get the unit vector in the same direction.

        Returns:
            Unit vector, or the zero vector when this vector has no length.
        """
        length = self.magnitude()
        if length < EPSILON:
            return Vector3.zero()
        return self / length

    def clamp_length(self, max_length: float) -> "Vector3":
        """Cap the length of the vector, preserving its direction.

        Args:
            max_length: Largest allowed magnitude (>= 0).

        Returns:
            This vector's copy if already short enough, otherwise a vector of
            length max_length pointing the same way.

        Raises:
            ValueError: If max_length is negative.
        """
        if max_length < 0.0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        length_sq = self.magnitude_squared()
        if length_sq <= max_length * max_length:
            return self.copy()
        return self * (max_length / math.sqrt(length_sq))

    def distance_to(self, other: "Vector3") -> float:
        return (self - other).magnitude()

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"


def rotation_matrix(axis: Vector3, angle: float) -> np.ndarray:
    """Build a rotation matrix from an axis and an angle (Rodrigues' formula).

    Rotation follows the right-hand rule about the axis.

    Args:
        axis: Rotation axis; need not be normalized.
        angle: Rotation angle in radians.

    Returns:
        3x3 rotation matrix. A zero-length axis gives the identity.
    """
    n = axis.normalized()
    if n.magnitude_squared() == 0.0 or angle == 0.0:
        return np.eye(3)

    x, y, z = n.x, n.y, n.z
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
            [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
        ]
    )


def rotate_about_point(point: Vector3, axis: Vector3, angle: float, pivot: Vector3) -> Vector3:
    """Rotate a point about an axis passing through a pivot.

    Computes ``R·(point − pivot) + pivot``.
    """
    r = rotation_matrix(axis, angle)
    local = (point - pivot).to_array()
    return Vector3.from_array(r @ local) + pivot


def orthonormalize(matrix: np.ndarray) -> np.ndarray:
    """Project a nearly-orthonormal matrix back onto the rotation group.

    Uses the polar decomposition (via SVD), which gives the closest proper
    rotation in the Frobenius norm and spreads the correction evenly over
    all three axes.

    Args:
        matrix: 3x3 matrix that has drifted from orthonormality.

    Returns:
        3x3 rotation matrix with determinant +1.
    """
    u, _, vt = np.linalg.svd(matrix)
    result = u @ vt
    if np.linalg.det(result) < 0.0:
        u[:, -1] = -u[:, -1]
        result = u @ vt
    return result
