"""MeshFlight headless driver.

Runs the flight simulation without a window: builds a procedural glider,
applies constant thrust and gravity for a number of frames at a fixed time
step, and logs telemetry once per simulated second. Rendering and input
handling belong to the host application; this driver exists for
development and tuning.

Typical usage:
    python -m meshflight.main --frames 600 --thrust 15
    python -m meshflight.main --config config/simulation.yaml --dt 0.02
"""

import argparse
import logging
import sys

from meshflight.config import SimulationConfig, load_config
from meshflight.core.logging_system import get_logger, initialize_logging
from meshflight.core.resource_path import get_config_path
from meshflight.errors import ConfigurationError
from meshflight.physics.flight_model.base import GRAVITY, AircraftState, ControlInputs
from meshflight.physics.shapes import build_glider_mesh
from meshflight.physics.vectors import Vector3
from meshflight.simulation import FlightSimulation
from meshflight.version import get_about_info, get_version

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(description="MeshFlight - headless flight simulation")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Simulation YAML file (default: config/simulation.yaml if present)",
    )
    parser.add_argument("--frames", type=int, default=600, help="Number of frames to simulate")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Time step in seconds")
    parser.add_argument(
        "--thrust", type=float, default=15.0, help="Forward thrust acceleration (m/s²)"
    )
    parser.add_argument(
        "--altitude", type=float, default=100.0, help="Starting altitude of the body center (m)"
    )
    parser.add_argument("--no-gravity", action="store_true", help="Disable gravity")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--version", action="version", version=f"MeshFlight {get_version()}")
    return parser.parse_args(argv)


def load_simulation_config(path: str | None) -> SimulationConfig:
    """Load the configuration named on the command line or the bundled default."""
    if path is not None:
        return load_config(path)
    default_path = get_config_path("simulation.yaml")
    if default_path.exists():
        return load_config(default_path)
    logger.info("No configuration file found, using defaults")
    return SimulationConfig()


def format_state(state: AircraftState) -> str:
    """One-line telemetry summary for logs."""
    return (
        f"t#{state.step_count} pos={state.center} speed={state.speed:.1f}m/s "
        f"alt={state.altitude:.1f}m fwd={state.forward} ground={state.on_ground}"
    )


def run(args: argparse.Namespace) -> AircraftState:
    """Run the simulation described by the arguments.

    Args:
        args: Parsed command line arguments.

    Returns:
        Final aircraft state.
    """
    config = load_simulation_config(args.config)
    sim = FlightSimulation(build_glider_mesh(), config)
    sim.reset(center=Vector3(0.0, args.altitude, 0.0))

    log_every = max(1, round(1.0 / args.dt)) if args.dt > 0 else args.frames
    gravity = 0.0 if args.no_gravity else GRAVITY
    state = sim.state

    for frame in range(1, args.frames + 1):
        # Thrust follows the nose, so rebuild inputs every frame
        inputs = ControlInputs(thrust=sim.body.forward() * args.thrust).with_gravity(gravity)
        state = sim.step(args.dt, inputs)
        if frame % log_every == 0:
            logger.info(format_state(state))

    return state


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    logging_config = get_config_path("logging.yaml")
    if logging_config.exists() and not args.debug:
        initialize_logging(str(logging_config), use_platform_dir=True)
    else:
        initialize_logging(level=logging.DEBUG if args.debug else logging.INFO)
    about = get_about_info()
    logger.info("MeshFlight %s starting (numpy %s)", about["version"], about["numpy"])

    try:
        state = run(args)
    except ConfigurationError as e:
        logger.error("Cannot start simulation: %s", e)
        return 2

    print(format_state(state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
