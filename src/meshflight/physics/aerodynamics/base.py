"""Abstract aerodynamic model interface.

An aerodynamic model turns the current hull geometry and velocity into a
net force and torque. Models are interchangeable strategies selected by
configuration; the integrator only depends on this interface.

Typical usage example:
    from meshflight.physics.aerodynamics.base import IAerodynamicModel

    class MyModel(IAerodynamicModel):
        def compute(self, mesh, center, velocity) -> AeroLoads:
            return AeroLoads()
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import Vector3


@dataclass
class AeroLoads:
    """Net aerodynamic force and torque on the body.

    Attributes:
        force: Net force, already scaled by the model's force coefficient.
        torque: Net torque, already scaled by the model's torque coefficient.
    """

    force: Vector3 = field(default_factory=Vector3.zero)
    torque: Vector3 = field(default_factory=Vector3.zero)


class IAerodynamicModel(ABC):
    """Interface for aerodynamic force models.

    compute() runs once per simulated frame over the whole hull, so
    implementations should avoid per-vertex Python loops.
    """

    name = "abstract"

    @abstractmethod
    def compute(self, mesh: Mesh, center: Vector3, velocity: Vector3) -> AeroLoads:
        """Compute aerodynamic loads for the current frame.

        Args:
            mesh: Hull mesh with world-space vertex positions.
            center: Body center in world space.
            velocity: Body velocity in world space.

        Returns:
            Net force and torque. Never contains NaN for finite inputs.
        """
