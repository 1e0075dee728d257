"""Per-frame inputs and telemetry state of the flight model.

The host's input layer turns raw key or stick state into a ControlInputs
value each frame; the integrator consumes it and returns an AircraftState
snapshot that a HUD may display.

Typical usage example:
    from meshflight.physics.flight_model.base import ControlInputs

    inputs = ControlInputs(thrust=forward * 20.0).with_gravity(9.81)
    state = integrator.step(dt=0.016, inputs=inputs)
    print(f"Altitude: {state.altitude:.1f}m")
"""

from dataclasses import dataclass, field

from meshflight.physics.vectors import Vector3

GRAVITY = 9.81  # m/s²


@dataclass
class ControlInputs:
    """Vectors driving one integration step.

    All vectors are world-space accelerations except torque, which is an
    angular acceleration about the body's (forward, up, right) axes.

    Attributes:
        thrust: Propulsive acceleration.
        torque: Commanded angular acceleration (roll, yaw, pitch).
        wind: Wind acceleration.
        gravity: Gravitational acceleration.
    """

    thrust: Vector3 = field(default_factory=Vector3.zero)
    torque: Vector3 = field(default_factory=Vector3.zero)
    wind: Vector3 = field(default_factory=Vector3.zero)
    gravity: Vector3 = field(default_factory=Vector3.zero)

    def __post_init__(self) -> None:
        """Take copies so later changes by the caller do not leak in."""
        self.thrust = self.thrust.copy()
        self.torque = self.torque.copy()
        self.wind = self.wind.copy()
        self.gravity = self.gravity.copy()

    def with_gravity(self, g: float = GRAVITY) -> "ControlInputs":
        """Copy of these inputs with downward gravity of magnitude g."""
        return ControlInputs(
            thrust=self.thrust,
            torque=self.torque,
            wind=self.wind,
            gravity=Vector3(0.0, -g, 0.0),
        )

    def linear_acceleration(self) -> Vector3:
        """Sum of thrust, wind and gravity."""
        return self.thrust + self.wind + self.gravity


@dataclass
class AircraftState:
    """Read-only snapshot of the body after a step.

    Attributes:
        center: Body center (m).
        velocity: Linear velocity (m/s).
        angular_velocity: Roll, yaw and pitch rates (rad/s).
        forward: Unit forward axis.
        up: Unit up axis.
        right: Unit right axis.
        aero_force: Aerodynamic force used in the step.
        aero_torque: Aerodynamic torque computed in the step.
        on_ground: Whether the ground policy held the body this step.
        step_count: Number of steps taken so far.
    """

    center: Vector3 = field(default_factory=Vector3.zero)
    velocity: Vector3 = field(default_factory=Vector3.zero)
    angular_velocity: Vector3 = field(default_factory=Vector3.zero)
    forward: Vector3 = field(default_factory=lambda: Vector3(1.0, 0.0, 0.0))
    up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    right: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    aero_force: Vector3 = field(default_factory=Vector3.zero)
    aero_torque: Vector3 = field(default_factory=Vector3.zero)
    on_ground: bool = False
    step_count: int = 0

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()

    @property
    def altitude(self) -> float:
        return self.center.y
