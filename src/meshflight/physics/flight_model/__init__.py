"""Flight model: control inputs, telemetry state and the integrator."""

from meshflight.physics.flight_model.base import AircraftState, ControlInputs
from meshflight.physics.flight_model.integrator import FlightIntegrator

__all__ = ["AircraftState", "ControlInputs", "FlightIntegrator"]
