"""Exceptions raised by MeshFlight.

Construction-time problems (bad configuration, degenerate meshes) are fatal
and surface to whoever builds the simulation. Numerical edge cases inside a
physics step are handled locally. Only an invalid time step raises during a
step.
"""


class ConfigurationError(ValueError):
    """Raised when a simulation cannot be built from the given inputs."""


class MeshError(ConfigurationError):
    """Raised when a mesh is empty, malformed or geometrically degenerate."""
