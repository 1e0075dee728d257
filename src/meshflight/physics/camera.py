"""Chase camera attached to the body frame.

The camera sits behind and above the aircraft and looks at a point ahead
of the nose. It is recomputed from the body's basis after every transform,
so it cannot drift away from the body under repeated rotations.
"""

from dataclasses import dataclass, field

from meshflight.physics.vectors import Vector3


@dataclass
class Camera:
    """Camera pose read by the renderer.

    Attributes:
        position: Eye position in world space.
        target: Point the camera looks at.
        up: Camera up direction (unit length).
    """

    position: Vector3 = field(default_factory=Vector3.zero)
    target: Vector3 = field(default_factory=Vector3.zero)
    up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))

    def copy(self) -> "Camera":
        return Camera(self.position.copy(), self.target.copy(), self.up.copy())


@dataclass(frozen=True)
class ChaseCameraRig:
    """Fixed offsets of the chase camera in the body frame.

    Attributes:
        height: Distance above the center along the body up axis.
        distance: Distance behind the center along the body forward axis.
        look_ahead: Distance ahead of the center of the look-at target.
    """

    height: float = 3.0
    distance: float = 12.0
    look_ahead: float = 5.0

    def place(self, center: Vector3, forward: Vector3, up: Vector3) -> Camera:
        """Compute the camera pose for a body pose.

        Args:
            center: Body center.
            forward: Unit forward axis.
            up: Unit up axis.

        Returns:
            Camera at ``center + up*height - forward*distance`` looking at
            ``center + forward*look_ahead``.
        """
        return Camera(
            position=center + up * self.height - forward * self.distance,
            target=center + forward * self.look_ahead,
            up=up.copy(),
        )
