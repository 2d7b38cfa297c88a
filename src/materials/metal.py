# materials/metal.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_unit_vector
from geometry.hittable import Hit
from materials.material import Material

class Metal(Material):
    """
    Mirror-like material. fuzz in [0, 1] blurs the reflection; 0 is a
    perfect mirror.
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        super().__init__(albedo)
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: Hit, rng) -> Optional[Tuple[Ray, Vector3]]:
        normal = rec.normal
        reflected = reflect(ray_in.direction, normal)
        if self.fuzz > 0:
            reflected = reflected + random_unit_vector(rng) * self.fuzz
        scattered = Ray(rec.at, reflected)

        if scattered.direction.dot(normal) > 0:
            return scattered, self.albedo

        return None  # Absorb the ray if it does not scatter forward

    def __hash__(self) -> int:
        return hash(("Metal", tuple(self.albedo), self.fuzz))

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
