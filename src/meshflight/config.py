"""Simulation configuration.

Configuration is a tree of dataclasses built from a plain dictionary,
usually loaded from a YAML file (see config/simulation.yaml). Every section
and key is optional; missing values fall back to the defaults below.

Typical usage:
    from meshflight.config import load_config

    config = load_config("config/simulation.yaml")
    print(config.integrator.max_speed)
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from meshflight.core.logging_system import get_logger
from meshflight.errors import ConfigurationError
from meshflight.physics.camera import ChaseCameraRig
from meshflight.physics.vectors import Vector3

logger = get_logger(__name__)

AERODYNAMIC_MODELS = ("surface_lift", "simple_drag", "none")


def _number(section: dict, key: str, default: float | None, minimum: float | None = None):
    """Read a float from a config section, validating it."""
    value = section.get(key, default)
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e
    if not math.isfinite(value):
        raise ConfigurationError(f"{key} must be finite, got {value}")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _vector(section: dict, key: str, default: Vector3) -> Vector3:
    value = section.get(key)
    if value is None:
        return default.copy()
    if isinstance(value, dict):
        value = [value.get("x", 0.0), value.get("y", 0.0), value.get("z", 0.0)]
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigurationError(f"{key} must have 3 components, got {value!r}")
    try:
        return Vector3(float(value[0]), float(value[1]), float(value[2]))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a 3-vector, got {value!r}") from e


def _flag(section: dict, key: str, default: bool) -> bool:
    """Read a boolean; quoted strings such as "false" are rejected."""
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def _section(data: dict, key: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Section '{key}' must be a mapping")
    return value


@dataclass
class BodyConfig:
    """How the body frame is derived from the mesh.

    Attributes:
        nose_axis: Model-space direction used to pick the head marker.
        right_axis: Model-space direction used to pick the wing tip marker.
        marker_epsilon: Minimum marker distance from the center.
    """

    nose_axis: Vector3 = field(default_factory=lambda: Vector3(1.0, 0.0, 0.0))
    right_axis: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    marker_epsilon: float = 1e-6

    @classmethod
    def from_dict(cls, data: dict) -> "BodyConfig":
        return cls(
            nose_axis=_vector(data, "nose_axis", Vector3(1.0, 0.0, 0.0)),
            right_axis=_vector(data, "right_axis", Vector3(0.0, 0.0, 1.0)),
            marker_epsilon=_number(data, "marker_epsilon", 1e-6, minimum=0.0),
        )


@dataclass
class AerodynamicsConfig:
    """Aerodynamic model selection and coefficients.

    Attributes:
        model: One of "surface_lift", "simple_drag" or "none".
        force_coefficient: Scale applied to the summed surface force.
        torque_coefficient: Scale applied to the summed surface torque.
        drag_coefficient: Drag constant for the simple drag model.
        include_aero_torque: Whether aerodynamic torque drives angular velocity.
    """

    model: str = "surface_lift"
    force_coefficient: float = 0.1
    torque_coefficient: float = 0.1
    drag_coefficient: float = 0.01
    include_aero_torque: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "AerodynamicsConfig":
        model = str(data.get("model", "surface_lift"))
        if model not in AERODYNAMIC_MODELS:
            raise ConfigurationError(
                f"Unknown aerodynamic model '{model}' (expected one of {', '.join(AERODYNAMIC_MODELS)})"
            )
        return cls(
            model=model,
            force_coefficient=_number(data, "force_coefficient", 0.1),
            torque_coefficient=_number(data, "torque_coefficient", 0.1),
            drag_coefficient=_number(data, "drag_coefficient", 0.01, minimum=0.0),
            include_aero_torque=_flag(data, "include_aero_torque", True),
        )


@dataclass
class WrapConfig:
    """Toroidal world boundary on the horizontal axes.

    Attributes:
        enabled: Whether wrapping is applied.
        bound: Half-width of the world along X and Z.
        distance: How far the body is moved when it crosses a bound.
    """

    enabled: bool = False
    bound: float = 500.0
    distance: float = 1000.0

    def __post_init__(self) -> None:
        """Check a wrapped body always lands back inside the bounds.

        Raises:
            ConfigurationError: If distance is not in (0, 2 * bound].
        """
        if self.bound <= 0.0:
            raise ConfigurationError(f"wrap bound must be > 0, got {self.bound}")
        if not 0.0 < self.distance <= 2.0 * self.bound:
            raise ConfigurationError(
                f"wrap distance must be in (0, {2.0 * self.bound}] for bound "
                f"{self.bound}, got {self.distance}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "WrapConfig":
        return cls(
            enabled=_flag(data, "enabled", False),
            bound=_number(data, "bound", 500.0, minimum=0.0),
            distance=_number(data, "distance", 1000.0, minimum=0.0),
        )


@dataclass
class IntegratorConfig:
    """Integrator limits and boundary policies.

    Attributes:
        max_speed: Cap on |velocity|.
        max_angular_speed: Cap on |angular_velocity| (rad/s).
        angular_damping: Factor applied to angular velocity after each step.
        max_dt: Largest time step integrated at once (None: unclamped).
        floor: Lower altitude bound for the ground policy.
        ceiling: Optional upper altitude bound.
        wrap: World-wrap policy.
        log_interval: Steps between debug telemetry log lines.
    """

    max_speed: float = 100.0
    max_angular_speed: float = 5.0
    angular_damping: float = 0.99
    max_dt: float | None = 0.1
    floor: float = 0.0
    ceiling: float | None = None
    wrap: WrapConfig = field(default_factory=WrapConfig)
    log_interval: int = 60

    def __post_init__(self) -> None:
        """Validate limits, including for directly constructed configs.

        Raises:
            ConfigurationError: If a limit is negative, damping is outside
                [0, 1], or the ceiling is below the floor.
        """
        if self.max_speed < 0.0:
            raise ConfigurationError(f"max_speed must be >= 0, got {self.max_speed}")
        if self.max_angular_speed < 0.0:
            raise ConfigurationError(
                f"max_angular_speed must be >= 0, got {self.max_angular_speed}"
            )
        if not 0.0 <= self.angular_damping <= 1.0:
            raise ConfigurationError(
                f"angular_damping must be in [0, 1], got {self.angular_damping}"
            )
        if self.max_dt is not None and self.max_dt < 0.0:
            raise ConfigurationError(f"max_dt must be >= 0, got {self.max_dt}")
        if self.ceiling is not None and self.ceiling < self.floor:
            raise ConfigurationError(
                f"ceiling ({self.ceiling}) is below floor ({self.floor})"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "IntegratorConfig":
        return cls(
            max_speed=_number(data, "max_speed", 100.0, minimum=0.0),
            max_angular_speed=_number(data, "max_angular_speed", 5.0, minimum=0.0),
            angular_damping=_number(data, "angular_damping", 0.99, minimum=0.0),
            max_dt=_number(data, "max_dt", 0.1, minimum=0.0),
            floor=_number(data, "floor", 0.0),
            ceiling=_number(data, "ceiling", None),
            wrap=WrapConfig.from_dict(_section(data, "wrap")),
            log_interval=int(data.get("log_interval", 60)),
        )


@dataclass
class CameraConfig:
    """Chase camera offsets (see ChaseCameraRig)."""

    height: float = 3.0
    distance: float = 12.0
    look_ahead: float = 5.0

    @classmethod
    def from_dict(cls, data: dict) -> "CameraConfig":
        return cls(
            height=_number(data, "height", 3.0),
            distance=_number(data, "distance", 12.0),
            look_ahead=_number(data, "look_ahead", 5.0),
        )

    def build_rig(self) -> ChaseCameraRig:
        return ChaseCameraRig(
            height=self.height, distance=self.distance, look_ahead=self.look_ahead
        )


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""

    body: BodyConfig = field(default_factory=BodyConfig)
    aerodynamics: AerodynamicsConfig = field(default_factory=AerodynamicsConfig)
    integrator: IntegratorConfig = field(default_factory=IntegratorConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SimulationConfig":
        """Build a configuration from a dictionary.

        Args:
            data: Mapping with optional "body", "aerodynamics", "integrator"
                and "camera" sections.

        Returns:
            Parsed configuration.

        Raises:
            ConfigurationError: If a value is invalid.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a mapping")
        return cls(
            body=BodyConfig.from_dict(_section(data, "body")),
            aerodynamics=AerodynamicsConfig.from_dict(_section(data, "aerodynamics")),
            integrator=IntegratorConfig.from_dict(_section(data, "integrator")),
            camera=CameraConfig.from_dict(_section(data, "camera")),
        )


def load_config(path: Path | str) -> SimulationConfig:
    """Load a simulation configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    config = SimulationConfig.from_dict(data)
    logger.info(
        "Loaded configuration from %s (aero model=%s)", path, config.aerodynamics.model
    )
    return config
