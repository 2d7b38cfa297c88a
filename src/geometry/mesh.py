# geometry/mesh.py
import math
from typing import Iterator, List, Optional, Sequence

import numpy as np

from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hit
from geometry.intersect import closest_triangle, pack_vertices, ray_triangle_intersect
from materials.lambertian import Lambertian
from materials.material import Material


class Triangle:
    """
    A single triangle: three points wound so that the face normal points to
    the visible side, plus per-vertex normals used when `smooth` is set.
    """
    def __init__(self, p0: Vector3, p1: Vector3, p2: Vector3,
                 normal: Optional[Vector3] = None,
                 normals: Optional[Sequence[Vector3]] = None,
                 smooth: bool = False):
        self.points = [p0, p1, p2]
        if normal is None:
            normal = (p1 - p0).cross(p2 - p0).normalize()
        self.normal = normal
        if normals is None:
            self.normals = [normal, normal, normal]
        else:
            self.normals = list(normals)
        self.smooth = smooth

    def hit(self, ray: Ray) -> Hit:
        t, u, v = ray_triangle_intersect(ray.origin.to_array(), ray.direction.to_array(),
                                         *(p.to_array() for p in self.points))
        if t <= 0.0:
            return Hit()
        return Hit(t=t, at=ray.at(t), triangle=self, u=u, v=v)

    def __repr__(self) -> str:
        return f"Triangle({self.points[0]!r}, {self.points[1]!r}, {self.points[2]!r})"


class TriangleMesh:
    """Represents a 3D mesh composed of triangles sharing one material."""
    def __init__(self, triangles: Optional[List[Triangle]] = None, material: Optional[Material] = None):
        self.triangles = triangles if triangles is not None else []
        self.material = material if material is not None else Lambertian(Vector3(0.5, 0.5, 0.5))
        self._vertices = None

    def add(self, triangle: Triangle):
        self.triangles.append(triangle)
        self._vertices = None

    @property
    def vertices(self) -> np.ndarray:
        """Packed (n, 3, 3) vertex array consumed by the intersection kernel."""
        if self._vertices is None:
            self._vertices = pack_vertices(self.triangles)
        return self._vertices

    def hit(self, ray: Ray) -> Hit:
        """
        Finds the triangle whose hit point has the largest z. This matches
        "closest to the camera" only for scenes laid out along -z in front
        of a camera looking down -z.
        """
        if not self.triangles:
            return Hit()
        index, t, u, v = closest_triangle(ray.origin.to_array(), ray.direction.to_array(),
                                          self.vertices)
        if index < 0:
            return Hit()
        return Hit(t=t, at=ray.at(t), triangle=self.triangles[index],
                   material=self.material, u=u, v=v)

    # Geometry edits. These are applied before the mesh is added to a scene.

    def translate(self, d: Vector3):
        for triangle in self.triangles:
            triangle.points = [p + d for p in triangle.points]
        self._vertices = None

    def scale(self, c: float):
        for triangle in self.triangles:
            triangle.points = [p * c for p in triangle.points]
        self._vertices = None

    def rotate(self, r: Vector3):
        """
        Rotates about the x, then y, then z axis. Angles are in degrees.
        Normals are rotated with the points and renormalized.
        """
        cos_sin = [(math.cos(math.radians(a)), math.sin(math.radians(a))) for a in (r.x, r.y, r.z)]
        for triangle in self.triangles:
            triangle.normal = _rotate(triangle.normal, cos_sin).normalize()
            triangle.normals = [_rotate(n, cos_sin).normalize() for n in triangle.normals]
            triangle.points = [_rotate(p, cos_sin) for p in triangle.points]
        self._vertices = None

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)


def _rotate(p: Vector3, cos_sin) -> Vector3:
    (cx, sx), (cy, sy), (cz, sz) = cos_sin
    # x axis
    p = Vector3(p.x, p.y * cx - p.z * sx, p.y * sx + p.z * cx)
    # y axis
    p = Vector3(p.x * cy + p.z * sy, p.y, -p.x * sy + p.z * cy)
    # z axis
    return Vector3(p.x * cz - p.y * sz, p.x * sz + p.y * cz, p.z)
