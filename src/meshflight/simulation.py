"""Simulation facade wiring body frame, aerodynamics and integrator.

The host loop owns timing, input and rendering. Each frame it calls step()
with the elapsed time and a ControlInputs value, then reads body.mesh and
camera for drawing and state for the HUD.

Typical usage:
    from meshflight.simulation import FlightSimulation

    sim = FlightSimulation.from_config_file(mesh, "config/simulation.yaml")
    while running:
        sim.step(dt, inputs)
        renderer.draw(sim.body.mesh, sim.camera)
"""

from pathlib import Path

from meshflight.config import SimulationConfig, load_config
from meshflight.core.logging_system import get_logger
from meshflight.physics.aerodynamics import create_aerodynamic_model
from meshflight.physics.body_frame import BodyFrame
from meshflight.physics.camera import Camera
from meshflight.physics.flight_model.base import AircraftState, ControlInputs
from meshflight.physics.flight_model.integrator import FlightIntegrator
from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import Vector3

logger = get_logger(__name__)


class FlightSimulation:
    """One aircraft flying over a flat, optionally wrapping, world.

    Attributes:
        config: Configuration the simulation was built from.
        body: Body frame of the aircraft.
        aero_model: Aerodynamic model in use.
        integrator: Integrator advancing the body.
    """

    def __init__(self, mesh: Mesh, config: SimulationConfig | None = None) -> None:
        """Build the simulation.

        Args:
            mesh: Hull mesh supplied by the host's model loader.
            config: Simulation configuration (defaults to SimulationConfig()).

        Raises:
            ConfigurationError: If the mesh or configuration is unusable.
        """
        self.config = config or SimulationConfig()
        self.body = BodyFrame(
            mesh, config=self.config.body, camera_rig=self.config.camera.build_rig()
        )
        self.aero_model = create_aerodynamic_model(self.config.aerodynamics)
        self.integrator = FlightIntegrator(
            self.body,
            self.aero_model,
            self.config.integrator,
            include_aero_torque=self.config.aerodynamics.include_aero_torque,
        )
        logger.info("Flight simulation initialized")

    @classmethod
    def from_config_file(cls, mesh: Mesh, path: Path | str) -> "FlightSimulation":
        """Build a simulation from a YAML configuration file."""
        return cls(mesh, load_config(path))

    def step(self, dt: float, inputs: ControlInputs | None = None) -> AircraftState:
        """Advance one frame (see FlightIntegrator.step)."""
        return self.integrator.step(dt, inputs or ControlInputs())

    @property
    def camera(self) -> Camera:
        return self.body.camera

    @property
    def state(self) -> AircraftState:
        return self.integrator.get_state()

    def reset(self, center: Vector3 | None = None, velocity: Vector3 | None = None) -> None:
        """Put the aircraft back at its starting pose.

        Args:
            center: Optional new center position.
            velocity: Optional initial velocity.
        """
        self.body.reset(center=center, velocity=velocity)
        self.integrator.reset()
        logger.info("Simulation reset at %s", self.body.center)
