# geometry/hittable.py
import math

from core.vector import Vector3


class Hit:
    """
    Records details of a ray-triangle intersection.

    A record with t <= 0 means nothing was hit. Its hit point sits at
    z = -inf so that any real hit wins the z comparison used by meshes
    and the world.
    """
    __slots__ = ("t", "at", "triangle", "material", "u", "v")

    def __init__(self, t: float = 0.0, at: Vector3 = None, triangle=None,
                 material=None, u: float = 0.0, v: float = 0.0):
        self.t = t                      # Ray parameter at intersection
        self.at = at if at is not None else Vector3(0.0, 0.0, -math.inf)
        self.triangle = triangle        # Triangle that was hit
        self.material = material        # Owning mesh's material
        self.u = u                      # Barycentric weight of points[1]
        self.v = v                      # Barycentric weight of points[2]

    @property
    def is_hit(self) -> bool:
        return self.t > 0.0

    def barycentric(self) -> Vector3:
        """Barycentric weights of points[0], points[1] and points[2]."""
        return Vector3(1.0 - self.u - self.v, self.u, self.v)

    @property
    def normal(self) -> Vector3:
        """
        Shading normal: the vertex normals interpolated with the barycentric
        weights for smooth triangles, the face normal otherwise.
        """
        triangle = self.triangle
        if not triangle.smooth:
            return triangle.normal
        w = self.barycentric()
        n0, n1, n2 = triangle.normals
        return (n0 * w.x + n1 * w.y + n2 * w.z).normalize()

    def __repr__(self) -> str:
        return f"Hit(t={self.t}, at={self.at!r}, material={self.material!r})"
