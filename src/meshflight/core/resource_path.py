"""Locate bundled resources such as configuration files."""

from pathlib import Path


def get_project_root() -> Path:
    """Get the project root (the directory holding config/).

    Returns:
        Path to the project root in a source checkout.
    """
    return Path(__file__).resolve().parent.parent.parent.parent


def get_config_path(relative: str = "") -> Path:
    """Get a path inside the config directory.

    Args:
        relative: Path relative to config/ (e.g. "simulation.yaml").

    Returns:
        Absolute path, which may not exist.
    """
    return get_project_root() / "config" / relative
