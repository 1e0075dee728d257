"""MeshFlight version and build information.

The version comes from a VERSION file in a source checkout, then from the
installed distribution's metadata, then from the hard-coded fallback.
"""

from importlib import metadata

import numpy as np

from meshflight.core.resource_path import get_project_root

__version__ = "0.1.0"
__license__ = "MIT"

DISTRIBUTION_NAME = "meshflight"


def get_version() -> str:
    """Get the current version string.

    Returns:
        Version string (e.g., "0.1.0").
    """
    version_file = get_project_root() / "VERSION"
    if version_file.is_file():
        text = version_file.read_text(encoding="utf-8").strip()
        if text:
            return text

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return __version__


def get_about_info() -> dict[str, str]:
    """Get version details for logs and --version output.

    Returns:
        Dictionary with name, version, license, description and the numpy
        version the physics runs on.
    """
    return {
        "name": "MeshFlight",
        "version": get_version(),
        "license": __license__,
        "description": "Rigid-body flight dynamics over a triangle mesh hull",
        "numpy": np.__version__,
    }
