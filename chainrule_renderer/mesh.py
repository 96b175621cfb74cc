#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from typing import NamedTuple

from .math_utils import Vec3, centroid


class Triangle(NamedTuple):
    """Three world-space vertices. Degenerate triangles are allowed."""
    p1: Vec3
    p2: Vec3
    p3: Vec3

    def centroid(self) -> Vec3:
        return centroid(self.p1, self.p2, self.p3)

    def normal(self) -> Vec3:
        """Non-normalized normal (P2 - P1) x (P3 - P1)."""
        return (self.p2 - self.p1).cross(self.p3 - self.p1)


class SurfaceMesh:
    """
    Regular grid mesh sampled from a scalar field.

    vertices is the (N+1) x (N+1) sample grid stored row by row in i (x
    index) then j (y index); faces holds index triples, two per grid cell
    split along the (x2, y1)-(x1, y2) diagonal.
    """

    def __init__(self, vertices=None, faces=None):
        self.vertices = vertices if vertices is not None else []
        self.faces = faces if faces is not None else []

    def __len__(self):
        return len(self.faces)

    @classmethod
    def from_field(cls, field, resolution: int = 25, extent: float = 2.0) -> 'SurfaceMesh':
        """Sample field over [-extent, extent]^2 with resolution cells per side."""
        n = int(resolution)
        step = (2 * extent) / n
        row = n + 1

        vertices = []
        for i in range(row):
            x = -extent + i * step
            for j in range(row):
                y = -extent + j * step
                vertices.append(Vec3(x, y, field(x, y)))

        faces = []
        for i in range(n):
            for j in range(n):
                v11 = i * row + j          # (x1, y1)
                v21 = (i + 1) * row + j    # (x2, y1)
                v12 = i * row + j + 1      # (x1, y2)
                v22 = (i + 1) * row + j + 1
                faces.append((v11, v21, v12))
                faces.append((v21, v22, v12))

        return cls(vertices, faces)

    def triangles(self):
        verts = self.vertices
        return [Triangle(verts[a], verts[b], verts[c]) for a, b, c in self.faces]
