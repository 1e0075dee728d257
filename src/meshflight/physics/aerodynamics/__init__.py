"""Aerodynamic force models.

Models share the IAerodynamicModel interface and are selected by name
from configuration with create_aerodynamic_model().
"""

from meshflight.config import AerodynamicsConfig
from meshflight.core.logging_system import get_logger
from meshflight.errors import ConfigurationError
from meshflight.physics.aerodynamics.base import AeroLoads, IAerodynamicModel
from meshflight.physics.aerodynamics.simple_drag import NoAerodynamics, SimpleDragModel
from meshflight.physics.aerodynamics.surface_lift import SurfaceLiftModel

logger = get_logger(__name__)


def create_aerodynamic_model(config: AerodynamicsConfig | None = None) -> IAerodynamicModel:
    """Create the aerodynamic model named in the configuration.

    Args:
        config: Aerodynamics section (defaults to AerodynamicsConfig()).

    Returns:
        Configured model instance.

    Raises:
        ConfigurationError: If the model name is unknown.
    """
    config = config or AerodynamicsConfig()

    if config.model == "surface_lift":
        model: IAerodynamicModel = SurfaceLiftModel(
            force_coefficient=config.force_coefficient,
            torque_coefficient=config.torque_coefficient,
        )
    elif config.model == "simple_drag":
        model = SimpleDragModel(drag_coefficient=config.drag_coefficient)
    elif config.model == "none":
        model = NoAerodynamics()
    else:
        raise ConfigurationError(f"Unknown aerodynamic model: {config.model}")

    logger.info("Aerodynamic model: %s", model.name)
    return model


__all__ = [
    "AeroLoads",
    "IAerodynamicModel",
    "NoAerodynamics",
    "SimpleDragModel",
    "SurfaceLiftModel",
    "create_aerodynamic_model",
]
