"""Per-triangle surface force model.

Each hull triangle pushes along its normal with a strength proportional to
its area and to the square of the velocity component parallel to it. The
per-triangle forces also produce a torque about the body center. This is a
game-grade approximation of lift and drag, not a flow solver.

For a triangle (i, j, k), with positions relative to the body center:

    side1 = i - j, side2 = j - k
    normal = normalize(side1 x side2), area = |side1 x side2| / 2
    centroid = (i + j + k) / 3
    v_t = v - (v . normal) normal
    f = |v_t|^2 * area * normal
    t = -(centroid x f) / |centroid|^2

force = force_coefficient * sum(f), torque = torque_coefficient * sum(t).

All triangles are processed together with numpy.
"""

import numpy as np

from meshflight.core.logging_system import get_logger
from meshflight.physics.aerodynamics.base import AeroLoads, IAerodynamicModel
from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import Vector3

logger = get_logger(__name__)

# Cross products or centroid distances below this contribute nothing
DEGENERATE_EPSILON = 1e-12


class SurfaceLiftModel(IAerodynamicModel):
    """Surface force model summed over every hull triangle.

    Examples:
        >>> model = SurfaceLiftModel(force_coefficient=0.1, torque_coefficient=0.0)
        >>> loads = model.compute(body.mesh, body.center, body.velocity)
    """

    name = "surface_lift"

    def __init__(self, force_coefficient: float = 0.1, torque_coefficient: float = 0.1) -> None:
        """Create the model.

        Args:
            force_coefficient: Scale applied to the summed force.
            torque_coefficient: Scale applied to the summed torque. Zero turns
                off rotational feedback from the surfaces.
        """
        self.force_coefficient = force_coefficient
        self.torque_coefficient = torque_coefficient

    def surface_forces(
        self, mesh: Mesh, center: Vector3, velocity: Vector3
    ) -> tuple[np.ndarray, np.ndarray]:
        """Compute unscaled per-triangle forces and centroids.

        Args:
            mesh: Hull mesh with world-space positions.
            center: Body center.
            velocity: Body velocity.

        Returns:
            Tuple of (forces, centroids), both (M, 3) arrays in coordinates
            relative to the center. Degenerate triangles have zero force.
        """
        local = mesh.positions - center.to_array()
        triangles = mesh.triangles
        i = local[triangles[:, 0]]
        j = local[triangles[:, 1]]
        k = local[triangles[:, 2]]

        side1 = i - j
        side2 = j - k
        cross = np.cross(side1, side2)
        cross_length = np.linalg.norm(cross, axis=1)

        normals = np.zeros_like(cross)
        valid = cross_length > DEGENERATE_EPSILON
        normals[valid] = cross[valid] / cross_length[valid, np.newaxis]
        areas = 0.5 * cross_length

        v = velocity.to_array()
        normal_speed = normals @ v
        tangential = v - normal_speed[:, np.newaxis] * normals
        tangential_sq = np.einsum("ij,ij->i", tangential, tangential)

        forces = (tangential_sq * areas)[:, np.newaxis] * normals
        centroids = (i + j + k) / 3.0
        return forces, centroids

    def compute(self, mesh: Mesh, center: Vector3, velocity: Vector3) -> AeroLoads:
        forces, centroids = self.surface_forces(mesh, center, velocity)

        centroid_sq = np.einsum("ij,ij->i", centroids, centroids)
        torques = np.zeros_like(forces)
        offset = centroid_sq > DEGENERATE_EPSILON
        torques[offset] = (
            -np.cross(centroids[offset], forces[offset]) / centroid_sq[offset, np.newaxis]
        )

        force = forces.sum(axis=0) * self.force_coefficient
        torque = torques.sum(axis=0) * self.torque_coefficient
        return AeroLoads(force=Vector3.from_array(force), torque=Vector3.from_array(torque))
