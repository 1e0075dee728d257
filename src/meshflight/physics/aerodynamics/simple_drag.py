"""Low-fidelity aerodynamic models.

SimpleDragModel resists motion with quadratic drag and no lift.
NoAerodynamics turns the aerodynamic contribution off entirely, which is
useful for testing the integrator in isolation.
"""

import numpy as np

from meshflight.physics.aerodynamics.base import AeroLoads, IAerodynamicModel
from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import Vector3


def hull_area(mesh: Mesh) -> float:
    """Total surface area of the mesh triangles."""
    triangles = mesh.triangles
    a = mesh.positions[triangles[:, 0]]
    b = mesh.positions[triangles[:, 1]]
    c = mesh.positions[triangles[:, 2]]
    return float(0.5 * np.linalg.norm(np.cross(b - a, c - a), axis=1).sum())


class SimpleDragModel(IAerodynamicModel):
    """Quadratic drag opposing velocity.

    force = -drag_coefficient * hull_area * |v| * v, torque = 0.
    """

    name = "simple_drag"

    def __init__(self, drag_coefficient: float = 0.01) -> None:
        self.drag_coefficient = drag_coefficient

    def compute(self, mesh: Mesh, center: Vector3, velocity: Vector3) -> AeroLoads:
        speed = velocity.magnitude()
        if speed == 0.0:
            return AeroLoads()
        drag = velocity * (-self.drag_coefficient * hull_area(mesh) * speed)
        return AeroLoads(force=drag, torque=Vector3.zero())


class NoAerodynamics(IAerodynamicModel):
    """Model that produces no force and no torque."""

    name = "none"

    def compute(self, mesh: Mesh, center: Vector3, velocity: Vector3) -> AeroLoads:
        return AeroLoads()
