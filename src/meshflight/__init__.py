"""MeshFlight - rigid-body flight dynamics over a triangle mesh hull."""

from meshflight.version import __version__

__all__ = ["__version__"]
