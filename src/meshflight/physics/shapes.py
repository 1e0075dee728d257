"""Procedural hull meshes.

Model files are loaded by the host application; these builders provide
small meshes for the headless driver and for tests. All shapes use the
default model axes: nose toward +X, right wing toward +Z, up toward +Y.
"""

from meshflight.physics.mesh import Mesh
from meshflight.physics.vectors import Vector3


def build_triangle_mesh(a: Vector3, b: Vector3, c: Vector3) -> Mesh:
    """Build a mesh holding one triangle.

    Args:
        a: First vertex.
        b: Second vertex.
        c: Third vertex.

    Returns:
        Mesh with three vertices and indices [0, 1, 2].
    """
    return Mesh([a.to_tuple(), b.to_tuple(), c.to_tuple()], [0, 1, 2])


def build_glider_mesh(
    span: float = 10.0,
    length: float = 6.0,
    sweep: float = 1.0,
    fin_height: float = 1.5,
) -> Mesh:
    """Build a flat delta-wing glider.

    The wing is two single-sided, upward-facing triangles joining nose, tail
    and each wing tip. A vertical fin is added at the tail when fin_height
    is positive.

    Args:
        span: Tip-to-tip wing span.
        length: Nose-to-tail length.
        sweep: How far behind the mid-point the wing tips sit.
        fin_height: Height of the tail fin (0 for no fin).

    Returns:
        Glider mesh.
    """
    half_length = length / 2.0
    half_span = span / 2.0

    positions = [
        (half_length, 0.0, 0.0),  # 0 nose
        (-half_length, 0.0, 0.0),  # 1 tail
        (-sweep, 0.0, half_span),  # 2 right wing tip
        (-sweep, 0.0, -half_span),  # 3 left wing tip
    ]
    indices = [
        0, 1, 2,  # right wing
        0, 3, 1,  # left wing
    ]

    if fin_height > 0.0:
        positions.append((-half_length, fin_height, 0.0))  # 4 fin top
        positions.append((-half_length + 0.3 * length, 0.0, 0.0))  # 5 fin root
        indices.extend([1, 5, 4])

    return Mesh(positions, indices)
