"""Semi-implicit Euler integrator for the body frame.

One call to step() advances the simulation by one frame:

1. Compute aerodynamic loads from the current pose and velocity.
2. Sum aerodynamic force, thrust, wind and gravity into an acceleration.
3. Add commanded torque (and, if enabled, aerodynamic torque) to the
   angular velocity.
4. Integrate velocity.
5. Apply the ground (and optional ceiling) policy.
6. Apply the world-wrap policy.
7. Clamp linear and angular speed.
8. Translate and rotate the body.
9. Damp angular velocity.

Typical usage example:
    from meshflight.physics.flight_model.integrator import FlightIntegrator

    integrator = FlightIntegrator(body, SurfaceLiftModel(), config.integrator)
    state = integrator.step(dt=0.016, inputs=ControlInputs(gravity=Vector3(0, -9.81, 0)))
"""

import math

from meshflight.config import IntegratorConfig
from meshflight.core.logging_system import get_logger
from meshflight.physics.aerodynamics.base import AeroLoads, IAerodynamicModel
from meshflight.physics.body_frame import BodyFrame
from meshflight.physics.flight_model.base import AircraftState, ControlInputs
from meshflight.physics.vectors import Vector3

logger = get_logger(__name__)

HORIZONTAL_AXES = ("x", "z")


class FlightIntegrator:
    """Advances a BodyFrame under aerodynamic loads and control inputs.

    The body is owned by the integrator for the duration of a step; nothing
    else should move it between the aerodynamic evaluation and the final
    transform.

    Attributes:
        body: Body frame being simulated.
        aero_model: Aerodynamic strategy evaluated each step.
        config: Limits and boundary policies.
        include_aero_torque: Whether aerodynamic torque feeds angular velocity.
    """

    def __init__(
        self,
        body: BodyFrame,
        aero_model: IAerodynamicModel,
        config: IntegratorConfig | None = None,
        include_aero_torque: bool = True,
    ) -> None:
        self.body = body
        self.aero_model = aero_model
        self.config = config or IntegratorConfig()
        self.include_aero_torque = include_aero_torque

        self.loads = AeroLoads()
        self.on_ground = False
        self._steps = 0

        logger.info(
            "Integrator ready: max_speed=%.1f, max_angular_speed=%.2f, damping=%.3f, "
            "aero_torque=%s, wrap=%s",
            self.config.max_speed,
            self.config.max_angular_speed,
            self.config.angular_damping,
            "on" if include_aero_torque else "off",
            "on" if self.config.wrap.enabled else "off",
        )

    def step(self, dt: float, inputs: ControlInputs) -> AircraftState:
        """Advance the simulation by one frame.

        Args:
            dt: Elapsed time in seconds. Clamped to config.max_dt.
            inputs: Thrust, torque, wind and gravity for this frame.

        Returns:
            Snapshot of the body after the step.

        Raises:
            ValueError: If dt is negative or not finite.
        """
        if not math.isfinite(dt) or dt < 0.0:
            raise ValueError(f"dt must be a finite non-negative number, got {dt}")
        max_dt = self.config.max_dt
        if max_dt is not None and dt > max_dt:
            logger.debug("Clamping dt %.4fs to %.4fs", dt, max_dt)
            dt = max_dt

        self._steps += 1
        body = self.body

        self.loads = self.aero_model.compute(body.mesh, body.center, body.velocity)
        acceleration = self.loads.force + inputs.linear_acceleration()

        angular_acceleration = inputs.torque
        if self.include_aero_torque:
            angular_acceleration = angular_acceleration + self._to_body_axes(self.loads.torque)
        body.angular_velocity = body.angular_velocity + angular_acceleration * dt

        body.velocity = body.velocity + acceleration * dt

        self._apply_altitude_bounds()
        self._apply_world_wrap()

        body.velocity = body.velocity.clamp_length(self.config.max_speed)
        body.angular_velocity = body.angular_velocity.clamp_length(self.config.max_angular_speed)

        body.translate(body.velocity * dt)
        body.rotate_by(body.angular_velocity * dt)

        body.angular_velocity = body.angular_velocity * self.config.angular_damping

        if self.config.log_interval > 0 and self._steps % self.config.log_interval == 0:
            logger.debug(
                "[STEP %d] center=%s vel=%s |v|=%.2f ang=%s aero_f=%s aero_t=%s",
                self._steps,
                body.center,
                body.velocity,
                body.velocity.magnitude(),
                body.angular_velocity,
                self.loads.force,
                self.loads.torque,
            )

        return self.get_state()

    def _to_body_axes(self, torque: Vector3) -> Vector3:
        """Express a world-space torque as (roll, yaw, pitch) components."""
        body = self.body
        return Vector3(torque.dot(body.forward()), torque.dot(body.up()), torque.dot(body.right()))

    def _apply_altitude_bounds(self) -> None:
        """Stop vertical motion through the floor (and ceiling, if set)."""
        body = self.body
        at_floor = body.center.y <= self.config.floor
        if at_floor and body.velocity.y < 0.0:
            body.velocity.y = 0.0

        ceiling = self.config.ceiling
        if ceiling is not None and body.center.y >= ceiling and body.velocity.y > 0.0:
            body.velocity.y = 0.0

        if at_floor and not self.on_ground:
            logger.info("Ground contact at center.y=%.2f", body.center.y)
        self.on_ground = at_floor

    def _apply_world_wrap(self) -> None:
        """Move the body to the opposite side when it leaves the world."""
        wrap = self.config.wrap
        if not wrap.enabled:
            return

        for axis in HORIZONTAL_AXES:
            position = getattr(self.body.center, axis)
            if position >= wrap.bound:
                shift = -wrap.distance
            elif position < -wrap.bound:
                shift = wrap.distance
            else:
                continue

            offset = Vector3.zero()
            setattr(offset, axis, shift)
            self.body.translate(offset)
            logger.info("World wrap on %s: %.1f -> %.1f", axis, position, position + shift)

    def get_state(self) -> AircraftState:
        """Snapshot of the body and the last aerodynamic loads."""
        body = self.body
        return AircraftState(
            center=body.center.copy(),
            velocity=body.velocity.copy(),
            angular_velocity=body.angular_velocity.copy(),
            forward=body.forward(),
            up=body.up(),
            right=body.right(),
            aero_force=self.loads.force.copy(),
            aero_torque=self.loads.torque.copy(),
            on_ground=self.on_ground,
            step_count=self._steps,
        )

    def get_loads(self) -> AeroLoads:
        return self.loads

    def get_step_count(self) -> int:
        return self._steps

    def reset(self) -> None:
        """Clear step counters and cached loads (the body is reset separately)."""
        self.loads = AeroLoads()
        self.on_ground = False
        self._steps = 0
