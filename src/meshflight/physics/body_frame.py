"""Body frame and pose tracking for the aircraft.

The body frame owns the aircraft's pose: a center point and an explicit
orientation matrix. The hull mesh and the two marker points (head and right
wing tip) are stored in model space, relative to the center, and placed in
the world on demand. A rigid transform therefore only touches the center and
the orientation, and cannot move the mesh, the markers and the camera out of
step with each other.

Orientation is re-orthonormalized after every rotation so the forward, up and
right axes stay a proper orthonormal basis however many incremental
rotations are applied.

Typical usage example:
    from meshflight.physics.body_frame import BodyFrame

    body = BodyFrame(mesh)
    body.translate(Vector3(0.0, 10.0, 0.0))
    body.rotate_by(Vector3(0.01, 0.0, 0.0))  # small roll
    renderer.draw(body.mesh, body.camera)
"""

import numpy as np

from meshflight.config import BodyConfig
from meshflight.core.logging_system import get_logger
from meshflight.errors import ConfigurationError
from meshflight.physics.camera import Camera, ChaseCameraRig
from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import (
    Vector3,
    orthonormalize,
    rotation_matrix,
)

logger = get_logger(__name__)

# Below this, two marker directions count as parallel
PARALLEL_TOLERANCE = 1e-6


class BodyFrame:
    """Pose of a rigid aircraft built from a hull mesh.

    Attributes:
        center: World-space reference point of the body.
        orientation: 3x3 rotation matrix mapping model space to world space.
        velocity: World-space linear velocity.
        angular_velocity: Angular rates (roll, yaw, pitch) about the body's
            forward, up and right axes, as consumed by rotate_by().
        camera: Chase camera pose, refreshed after every transform.
    """

    def __init__(
        self,
        mesh: Mesh,
        config: BodyConfig | None = None,
        camera_rig: ChaseCameraRig | None = None,
    ) -> None:
        """Build the body frame from a mesh.

        The center is the mean of the vertex positions. The head is the vertex
        furthest along the configured nose axis and the right wing tip the
        vertex furthest along the configured right axis, both measured from
        the center.

        Args:
            mesh: Hull mesh in model space. It is not modified.
            config: Marker selection settings (defaults to BodyConfig()).
            camera_rig: Chase camera offsets (defaults to ChaseCameraRig()).

        Raises:
            MeshError: If the mesh is invalid.
            ConfigurationError: If a marker coincides with the center or the
                two markers lie on one line through the center, or the derived
                up axis points toward the ground.
        """
        self.config = config or BodyConfig()
        self.camera_rig = camera_rig or ChaseCameraRig()

        mesh.validate()
        initial_center = mesh.centroid()

        self.head_index = mesh.extremal_vertex(self.config.nose_axis, initial_center)
        self.right_wing_tip_index = mesh.extremal_vertex(self.config.right_axis, initial_center)

        local_positions = mesh.positions - initial_center.to_array()
        self._local_mesh = mesh.with_positions(local_positions)
        self._head_local = local_positions[self.head_index].copy()
        self._wing_local = local_positions[self.right_wing_tip_index].copy()

        self._forward_local, self._right_local, self._up_local = self._derive_axes(
            self._head_local, self._wing_local, self.config.marker_epsilon
        )
        if self._up_local[1] < 0.0:
            raise ConfigurationError(
                f"Body up axis points downward in model space ({self._up_local}); "
                "check the configured nose and right axes"
            )

        self._initial_center = initial_center
        self.center = initial_center.copy()
        self.orientation = np.eye(3)
        self.velocity = Vector3.zero()
        self.angular_velocity = Vector3.zero()
        self.camera = Camera()
        self._sync_camera()

        logger.info(
            "Body frame built: %d vertices, %d triangles, center=%s, head=#%d, wing tip=#%d",
            mesh.vertex_count,
            mesh.triangle_count,
            self.center,
            self.head_index,
            self.right_wing_tip_index,
        )

    @staticmethod
    def _derive_axes(
        head: np.ndarray, wing: np.ndarray, epsilon: float
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Derive the model-space forward, right and up axes from the markers.

        Right is made orthogonal to forward (Gram-Schmidt) so the basis is
        orthonormal even when the wing tip is swept back.
        """
        head_distance = float(np.linalg.norm(head))
        wing_distance = float(np.linalg.norm(wing))
        if head_distance <= epsilon:
            raise ConfigurationError(
                f"Head marker coincides with body center (distance {head_distance:.3g})"
            )
        if wing_distance <= epsilon:
            raise ConfigurationError(
                f"Wing tip marker coincides with body center (distance {wing_distance:.3g})"
            )

        forward = head / head_distance
        right = wing / wing_distance
        if np.linalg.norm(np.cross(right, forward)) < PARALLEL_TOLERANCE:
            raise ConfigurationError("Head and wing tip markers are collinear with the center")

        right = right - np.dot(right, forward) * forward
        right = right / np.linalg.norm(right)
        up = np.cross(right, forward)
        up = up / np.linalg.norm(up)
        return forward, right, up

    # --- Derived axes ---

    def forward(self) -> Vector3:
        """Unit vector from the center toward the nose."""
        return Vector3.from_array(self.orientation @ self._forward_local)

    def backward(self) -> Vector3:
        return -self.forward()

    def right(self) -> Vector3:
        """Unit vector toward the right wing tip, orthogonal to forward."""
        return Vector3.from_array(self.orientation @ self._right_local)

    def up(self) -> Vector3:
        """Unit vector ``right x forward``; points away from the ground when level."""
        return Vector3.from_array(self.orientation @ self._up_local)

    # --- World-space geometry ---

    @property
    def head(self) -> Vector3:
        return self._to_world(self._head_local)

    @property
    def right_wing_tip(self) -> Vector3:
        return self._to_world(self._wing_local)

    @property
    def local_mesh(self) -> Mesh:
        """Hull mesh in model space, centered on the body center."""
        return self._local_mesh

    @property
    def mesh(self) -> Mesh:
        """World-space snapshot of the hull for rendering and aerodynamics."""
        return self._local_mesh.with_positions(self.world_positions())

    def world_positions(self) -> np.ndarray:
        """(N, 3) array of vertex positions in world space."""
        return self._local_mesh.positions @ self.orientation.T + self.center.to_array()

    def _to_world(self, local: np.ndarray) -> Vector3:
        return Vector3.from_array(self.orientation @ local) + self.center

    # --- Rigid transforms ---

    def translate(self, by: Vector3) -> None:
        """Move the body (mesh, markers and camera) by an offset.

        Args:
            by: World-space offset.
        """
        self.center = self.center + by
        self._sync_camera()

    def rotate_about_point(self, axis: Vector3, angle: float, pivot: Vector3) -> None:
        """Rotate the whole body about an axis through a pivot.

        Every point p of the body moves to ``R·(p − pivot) + pivot``.

        Args:
            axis: World-space rotation axis (need not be unit length).
            angle: Angle in radians, right-hand rule about the axis.
            pivot: World-space point the axis passes through.
        """
        r = rotation_matrix(axis, angle)
        offset = (self.center - pivot).to_array()
        self.center = Vector3.from_array(r @ offset) + pivot
        self.orientation = orthonormalize(r @ self.orientation)
        self._sync_camera()

    def rotate_by(self, euler: Vector3) -> None:
        """Apply roll, yaw and pitch increments about the body's own axes.

        The three rotations are applied in a fixed order about the center:
        roll about the current forward axis (euler.x), then yaw about the
        current up axis (euler.y), then pitch about the current right axis
        (euler.z). Axes are re-read after each sub-rotation. The order
        matters; for the small angles of a single frame the difference
        between orders is second order in the angles and negligible.

        Args:
            euler: (roll, yaw, pitch) increments in radians.
        """
        for axis, angle in ((self.forward, euler.x), (self.up, euler.y), (self.right, euler.z)):
            if angle != 0.0:
                self.rotate_about_point(axis(), angle, self.center)

    def reset(
        self,
        center: Vector3 | None = None,
        velocity: Vector3 | None = None,
        angular_velocity: Vector3 | None = None,
    ) -> None:
        """Return to the construction orientation.

        Args:
            center: New center (defaults to the construction center).
            velocity: New velocity (defaults to zero).
            angular_velocity: New angular velocity (defaults to zero).
        """
        self.center = (center if center is not None else self._initial_center).copy()
        self.orientation = np.eye(3)
        self.velocity = velocity.copy() if velocity is not None else Vector3.zero()
        self.angular_velocity = (
            angular_velocity.copy() if angular_velocity is not None else Vector3.zero()
        )
        self._sync_camera()
        logger.debug("Body frame reset to center=%s", self.center)

    def _sync_camera(self) -> None:
        self.camera = self.camera_rig.place(self.center, self.forward(), self.up())
