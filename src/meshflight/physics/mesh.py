"""Triangle mesh used as the aircraft hull.

A Mesh is an ordered vertex buffer plus a flat index list whose consecutive
triples name triangles. Topology never changes after construction; rigid
transforms produce a new Mesh sharing topology with different positions.

Positions are stored as an (N, 3) numpy array so the aerodynamic model can
work on all triangles at once. Vertex objects are produced on demand for
callers that want per-vertex records.

Typical usage example:
    from meshflight.physics.mesh import Mesh, Vertex

    mesh = Mesh.from_vertices(vertices, indices=[0, 1, 2])
    mesh.validate()
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from meshflight.errors import MeshError
from meshflight.physics.vectors import Vector2, Vector3

DEFAULT_COLOR = (1.0, 1.0, 1.0, 1.0)


@dataclass
class Vertex:
    """Single mesh vertex.

    Attributes:
        position: Position in the mesh's coordinate space.
        uv: Surface (texture) coordinate; render-only.
        color: RGBA color in 0.0-1.0; render-only.
    """

    position: Vector3
    uv: Vector2 = field(default_factory=Vector2)
    color: tuple[float, float, float, float] = DEFAULT_COLOR


class Mesh:
    """Vertex buffer and triangle index list.

    Attributes:
        positions: (N, 3) float array of vertex positions.
        uvs: (N, 2) float array of surface coordinates.
        colors: (N, 4) float array of RGBA colors.
        indices: Flat int array; each consecutive triple is one triangle.
        texture: Opaque handle owned by the renderer, passed through untouched.
    """

    def __init__(
        self,
        positions,
        indices: Sequence[int],
        uvs=None,
        colors=None,
        texture: Any = None,
    ) -> None:
        self.positions = np.array(positions, dtype=float).reshape(-1, 3)
        self.indices = np.array(indices, dtype=np.int64).reshape(-1)
        count = len(self.positions)
        if uvs is None:
            self.uvs = np.zeros((count, 2))
        else:
            self.uvs = np.array(uvs, dtype=float).reshape(-1, 2)
        if colors is None:
            self.colors = np.tile(np.array(DEFAULT_COLOR), (count, 1))
        else:
            self.colors = np.array(colors, dtype=float).reshape(-1, 4)
        self.texture = texture

    @classmethod
    def from_vertices(
        cls, vertices: Sequence[Vertex], indices: Sequence[int], texture: Any = None
    ) -> "Mesh":
        """Build a mesh from Vertex records.

        Args:
            vertices: Ordered vertices.
            indices: Flat triangle index list.
            texture: Optional renderer texture handle.

        Returns:
            New mesh.
        """
        positions = [v.position.to_tuple() for v in vertices]
        uvs = [v.uv.to_tuple() for v in vertices]
        colors = [tuple(v.color) for v in vertices]
        if not vertices:
            return cls(np.zeros((0, 3)), indices, texture=texture)
        return cls(positions, indices, uvs=uvs, colors=colors, texture=texture)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def triangles(self) -> np.ndarray:
        """(M, 3) array of vertex indices, one row per triangle."""
        return self.indices[: self.triangle_count * 3].reshape(-1, 3)

    @property
    def vertices(self) -> list[Vertex]:
        return list(self.iter_vertices())

    def iter_vertices(self) -> Iterator[Vertex]:
        for position, uv, color in zip(self.positions, self.uvs, self.colors):
            yield Vertex(
                position=Vector3.from_array(position),
                uv=Vector2(float(uv[0]), float(uv[1])),
                color=(float(color[0]), float(color[1]), float(color[2]), float(color[3])),
            )

    def vertex_position(self, index: int) -> Vector3:
        return Vector3.from_array(self.positions[index])

    def centroid(self) -> Vector3:
        """Arithmetic mean of the vertex positions."""
        if self.vertex_count == 0:
            raise MeshError("Mesh has no vertices")
        return Vector3.from_array(self.positions.mean(axis=0))

    def extremal_vertex(self, direction: Vector3, origin: Vector3 | None = None) -> int:
        """Find the vertex reaching furthest along a direction.

        Args:
            direction: Direction to project onto.
            origin: Point projections are measured from (default: origin).

        Returns:
            Index of the vertex with the largest projection. Ties resolve to
            the lowest index.
        """
        if self.vertex_count == 0:
            raise MeshError("Mesh has no vertices")
        offsets = self.positions
        if origin is not None:
            offsets = offsets - origin.to_array()
        return int(np.argmax(offsets @ direction.to_array()))

    def validate(self) -> None:
        """Check the mesh is usable for simulation.

        Raises:
            MeshError: If the mesh has no vertices, a partial triangle, an index
                outside the vertex buffer, mismatched attribute arrays, or
                non-finite positions.
        """
        if self.vertex_count == 0:
            raise MeshError("Mesh has no vertices")
        if len(self.indices) % 3 != 0:
            raise MeshError(
                f"Index count {len(self.indices)} is not a multiple of 3"
            )
        if len(self.indices) > 0:
            low = int(self.indices.min())
            high = int(self.indices.max())
            if low < 0 or high >= self.vertex_count:
                raise MeshError(
                    f"Triangle index out of range [0, {self.vertex_count}): min={low}, max={high}"
                )
        if len(self.uvs) != self.vertex_count or len(self.colors) != self.vertex_count:
            raise MeshError("Vertex attribute arrays do not match vertex count")
        if not np.all(np.isfinite(self.positions)):
            raise MeshError("Mesh contains non-finite vertex positions")

    def with_positions(self, positions: np.ndarray) -> "Mesh":
        """Copy of this mesh with new vertex positions and the same topology.

        Args:
            positions: (N, 3) array; N must equal vertex_count.

        Returns:
            New mesh sharing index, uv and color data with this one.
        """
        if len(positions) != self.vertex_count:
            raise MeshError(
                f"Expected {self.vertex_count} positions, got {len(positions)}"
            )
        mesh = Mesh.__new__(Mesh)
        mesh.positions = np.asarray(positions, dtype=float)
        mesh.indices = self.indices
        mesh.uvs = self.uvs
        mesh.colors = self.colors
        mesh.texture = self.texture
        return mesh

    def __repr__(self) -> str:
        return f"Mesh(vertices={self.vertex_count}, triangles={self.triangle_count})"
