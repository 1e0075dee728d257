"""Tests for the body frame (pose tracking and rigid transforms)."""

import itertools
import math

import numpy as np
import pytest

from meshflight.config import BodyConfig
from meshflight.errors import ConfigurationError, MeshError
from meshflight.physics.body_frame import BodyFrame
from meshflight.physics.camera import ChaseCameraRig
from meshflight.physics.mesh import Mesh
from meshflight.physics.shapes import build_glider_mesh
from meshflight.physics.vectors import Vector3


def assert_vector(actual: Vector3, expected: tuple[float, float, float], tol: float = 1e-9) -> None:
    np.testing.assert_allclose(actual.to_array(), expected, atol=tol)


def tracked_points(body: BodyFrame) -> np.ndarray:
    """All vertices plus center, head and wing tip, in world space."""
    markers = np.array(
        [body.center.to_array(), body.head.to_array(), body.right_wing_tip.to_array()]
    )
    return np.vstack([body.world_positions(), markers])


def pairwise_distances(points: np.ndarray) -> np.ndarray:
    return np.linalg.norm(points[:, np.newaxis, :] - points[np.newaxis, :, :], axis=2)


@pytest.fixture
def plus_body() -> BodyFrame:
    """Flat plus-shaped body centered on the origin: nose +X, right wing +Z."""
    return BodyFrame(build_glider_mesh(span=2.0, length=4.0, sweep=0.0, fin_height=0.0))


class TestBodyFrameConstruction:
    """Test markers and axes derived at construction."""

    def test_center_is_vertex_mean(self) -> None:
        """Test the center starts at the mean vertex position."""
        mesh = build_glider_mesh()
        body = BodyFrame(mesh)
        assert_vector(body.center, mesh.centroid().to_tuple())

    def test_markers(self, plus_body: BodyFrame) -> None:
        """Test head and wing tip are the extremal vertices."""
        assert plus_body.head_index == 0
        assert plus_body.right_wing_tip_index == 2
        assert_vector(plus_body.head, (2.0, 0.0, 0.0))
        assert_vector(plus_body.right_wing_tip, (0.0, 0.0, 1.0))

    def test_initial_axes(self, plus_body: BodyFrame) -> None:
        """Test forward, right and up for the nominal orientation."""
        assert_vector(plus_body.forward(), (1.0, 0.0, 0.0))
        assert_vector(plus_body.backward(), (-1.0, 0.0, 0.0))
        assert_vector(plus_body.right(), (0.0, 0.0, 1.0))
        assert_vector(plus_body.up(), (0.0, 1.0, 0.0))

    def test_swept_wing_basis_is_orthonormal(self) -> None:
        """Test a swept wing tip still yields an orthonormal basis."""
        body = BodyFrame(build_glider_mesh(sweep=2.0))
        f, r, u = body.forward(), body.right(), body.up()
        assert f.dot(r) == pytest.approx(0.0, abs=1e-12)
        assert f.dot(u) == pytest.approx(0.0, abs=1e-12)
        assert r.dot(u) == pytest.approx(0.0, abs=1e-12)
        assert u.y > 0.0

    def test_initial_camera(self, plus_body: BodyFrame) -> None:
        """Test the chase camera sits behind and above, looking ahead."""
        assert_vector(plus_body.camera.position, (-12.0, 3.0, 0.0))
        assert_vector(plus_body.camera.target, (5.0, 0.0, 0.0))
        assert_vector(plus_body.camera.up, (0.0, 1.0, 0.0))

    def test_custom_camera_rig(self) -> None:
        """Test camera offsets come from the rig."""
        body = BodyFrame(
            build_glider_mesh(span=2.0, length=4.0, sweep=0.0, fin_height=0.0),
            camera_rig=ChaseCameraRig(height=1.0, distance=2.0, look_ahead=3.0),
        )
        assert_vector(body.camera.position, (-2.0, 1.0, 0.0))
        assert_vector(body.camera.target, (3.0, 0.0, 0.0))

    def test_source_mesh_not_modified(self) -> None:
        """Test the input mesh is left untouched."""
        mesh = build_glider_mesh()
        before = mesh.positions.copy()
        body = BodyFrame(mesh)
        body.translate(Vector3(5.0, 5.0, 5.0))
        np.testing.assert_array_equal(mesh.positions, before)


class TestBodyFrameConfigurationErrors:
    """Test construction fails fast on degenerate input."""

    def test_empty_mesh(self) -> None:
        """Test zero vertices is fatal."""
        with pytest.raises(MeshError):
            BodyFrame(Mesh.from_vertices([], []))

    def test_index_out_of_range(self) -> None:
        """Test invalid indices are fatal."""
        with pytest.raises(MeshError):
            BodyFrame(Mesh([(1, 0, 0), (0, 0, 1), (-1, 0, -1)], [0, 1, 5]))

    def test_markers_coincide_with_center(self) -> None:
        """Test a mesh collapsed to a point is fatal."""
        mesh = Mesh([(1.0, 1.0, 1.0)] * 3, [0, 1, 2])
        with pytest.raises(ConfigurationError, match="coincides"):
            BodyFrame(mesh)

    def test_collinear_markers(self) -> None:
        """Test head and wing tip on one line through the center is fatal."""
        mesh = Mesh([(1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 0.0, 0.0)], [0, 1, 2])
        with pytest.raises(ConfigurationError, match="collinear"):
            BodyFrame(mesh)

    def test_up_axis_pointing_down(self) -> None:
        """Test axes giving a ground-facing up vector are rejected."""
        mesh = build_glider_mesh(span=2.0, length=4.0, sweep=0.0, fin_height=0.0)
        # The left tip as "right" wing makes right x forward point to -Y
        config = BodyConfig(right_axis=Vector3(0.0, 0.0, -1.0))
        with pytest.raises(ConfigurationError, match="downward"):
            BodyFrame(mesh, config=config)

    def test_marker_epsilon(self) -> None:
        """Test markers closer than marker_epsilon are rejected."""
        mesh = build_glider_mesh(span=2.0, length=4.0, sweep=0.0, fin_height=0.0)
        with pytest.raises(ConfigurationError):
            BodyFrame(mesh, config=BodyConfig(marker_epsilon=1.5))


class TestTranslate:
    """Test pure translation."""

    def test_translate_moves_everything(self, plus_body: BodyFrame) -> None:
        """Test center, markers, vertices and camera all move."""
        before_vertices = plus_body.world_positions()
        plus_body.translate(Vector3(1.0, 2.0, 3.0))

        assert_vector(plus_body.center, (1.0, 2.0, 3.0))
        assert_vector(plus_body.head, (3.0, 2.0, 3.0))
        assert_vector(plus_body.right_wing_tip, (1.0, 2.0, 4.0))
        np.testing.assert_allclose(plus_body.world_positions(), before_vertices + [1.0, 2.0, 3.0])
        assert_vector(plus_body.camera.position, (-11.0, 5.0, 3.0))
        assert_vector(plus_body.camera.target, (6.0, 2.0, 3.0))

    def test_translate_keeps_orientation(self, plus_body: BodyFrame) -> None:
        """Test translation does not change the basis."""
        plus_body.translate(Vector3(-7.0, 0.5, 2.0))
        assert_vector(plus_body.forward(), (1.0, 0.0, 0.0))
        assert_vector(plus_body.up(), (0.0, 1.0, 0.0))

    def test_render_mesh_is_world_space(self, plus_body: BodyFrame) -> None:
        """Test the mesh snapshot reflects the current pose."""
        plus_body.translate(Vector3(0.0, 10.0, 0.0))
        np.testing.assert_allclose(plus_body.mesh.positions[0], [2.0, 10.0, 0.0])
        np.testing.assert_array_equal(plus_body.mesh.indices, plus_body.local_mesh.indices)


class TestRotation:
    """Test rotations of the body."""

    def test_rotate_about_external_pivot(self, plus_body: BodyFrame) -> None:
        """Test rotating about a pivot other than the center moves the center."""
        plus_body.translate(Vector3(10.0, 0.0, 0.0))
        plus_body.rotate_about_point(Vector3(0.0, 1.0, 0.0), math.pi / 2, Vector3.zero())

        assert_vector(plus_body.center, (0.0, 0.0, -10.0))
        assert_vector(plus_body.forward(), (0.0, 0.0, -1.0))
        assert_vector(plus_body.head, (0.0, 0.0, -12.0))
        assert_vector(plus_body.camera.up, plus_body.up().to_tuple())

    def test_rotate_by_order(self, plus_body: BodyFrame) -> None:
        """Test roll is applied before yaw, each about the current axes."""
        plus_body.rotate_by(Vector3(math.pi / 2, math.pi / 2, 0.0))

        # Roll about +X turns up to +Z; yaw about that new up turns forward to +Y
        assert_vector(plus_body.forward(), (0.0, 1.0, 0.0))
        assert_vector(plus_body.right(), (1.0, 0.0, 0.0))
        assert_vector(plus_body.up(), (0.0, 0.0, 1.0))

    def test_rotate_by_pitch(self, plus_body: BodyFrame) -> None:
        """Test a pitch increment about the right axis raises the nose."""
        plus_body.rotate_by(Vector3(0.0, 0.0, math.pi / 2))
        # Right-hand rotation about +Z takes +X to +Y
        assert_vector(plus_body.forward(), (0.0, 1.0, 0.0))
        assert_vector(plus_body.up(), (-1.0, 0.0, 0.0))

    def test_rotate_by_keeps_center(self, plus_body: BodyFrame) -> None:
        """Test body-axis rotations pivot about the center."""
        plus_body.translate(Vector3(4.0, 5.0, 6.0))
        plus_body.rotate_by(Vector3(0.3, -0.2, 0.1))
        assert_vector(plus_body.center, (4.0, 5.0, 6.0))

    def test_zero_rotation_is_exact_noop(self, plus_body: BodyFrame) -> None:
        """Test a zero increment leaves the orientation bit-for-bit unchanged."""
        plus_body.rotate_by(Vector3.zero())
        np.testing.assert_array_equal(plus_body.orientation, np.eye(3))

    def test_camera_follows_rotation(self, plus_body: BodyFrame) -> None:
        """Test the camera stays at its body-frame offset after rotating."""
        plus_body.rotate_by(Vector3(0.4, 0.7, -0.3))
        center, forward, up = plus_body.center, plus_body.forward(), plus_body.up()
        expected_position = center + up * 3.0 - forward * 12.0
        expected_target = center + forward * 5.0
        assert_vector(plus_body.camera.position, expected_position.to_tuple())
        assert_vector(plus_body.camera.target, expected_target.to_tuple())
        assert_vector(plus_body.camera.up, up.to_tuple())


class TestRigidity:
    """Test transforms preserve all pairwise distances."""

    def test_random_transforms_preserve_distances(self) -> None:
        """Test rigidity over a random sequence of translations and rotations."""
        body = BodyFrame(build_glider_mesh())
        before = pairwise_distances(tracked_points(body))

        rng = np.random.default_rng(42)
        for _ in range(50):
            body.translate(Vector3.from_array(rng.uniform(-5.0, 5.0, 3)))
            body.rotate_by(Vector3.from_array(rng.uniform(-0.5, 0.5, 3)))
            body.rotate_about_point(
                Vector3.from_array(rng.normal(size=3)),
                float(rng.uniform(-math.pi, math.pi)),
                Vector3.from_array(rng.uniform(-20.0, 20.0, 3)),
            )

        after = pairwise_distances(tracked_points(body))
        np.testing.assert_allclose(after, before, atol=1e-9)


class TestBasisOrthonormality:
    """Test the basis does not drift under many small rotations."""

    def test_basis_after_many_steps(self) -> None:
        """Test orthonormality after thousands of incremental rotations."""
        body = BodyFrame(build_glider_mesh())
        for _ in range(3000):
            body.rotate_by(Vector3(0.011, -0.023, 0.017))
            body.translate(Vector3(0.1, 0.0, 0.05))

        axes = [body.forward(), body.up(), body.right()]
        for axis in axes:
            assert axis.magnitude() == pytest.approx(1.0, abs=1e-4)
        for a, b in itertools.combinations(axes, 2):
            assert a.dot(b) == pytest.approx(0.0, abs=1e-4)

        # up stays right x forward
        cross = body.right().cross(body.forward())
        assert_vector(cross, body.up().to_tuple(), tol=1e-4)


class TestReset:
    """Test resetting the pose."""

    def test_reset_restores_orientation(self, plus_body: BodyFrame) -> None:
        """Test reset returns to the construction pose."""
        plus_body.velocity = Vector3(1.0, 2.0, 3.0)
        plus_body.rotate_by(Vector3(0.5, 0.5, 0.5))
        plus_body.translate(Vector3(3.0, 3.0, 3.0))

        plus_body.reset()

        assert_vector(plus_body.center, (0.0, 0.0, 0.0))
        assert_vector(plus_body.forward(), (1.0, 0.0, 0.0))
        assert plus_body.velocity == Vector3.zero()

    def test_reset_at_new_center(self, plus_body: BodyFrame) -> None:
        """Test reset can place the body elsewhere with a velocity."""
        plus_body.reset(center=Vector3(0.0, 100.0, 0.0), velocity=Vector3(10.0, 0.0, 0.0))
        assert_vector(plus_body.center, (0.0, 100.0, 0.0))
        assert plus_body.velocity == Vector3(10.0, 0.0, 0.0)
        assert_vector(plus_body.camera.position, (-12.0, 103.0, 0.0))
