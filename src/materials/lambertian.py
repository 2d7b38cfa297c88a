# materials/lambertian.py

from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_unit_vector
from geometry.hittable import Hit
from materials.material import Material


class Lambertian(Material):
    """
    Diffuse material: scatters toward a random point on the unit sphere
    around the surface normal.
    """

    def scatter(self, ray_in: Ray, rec: Hit, rng) -> Tuple[Ray, Vector3]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation). Never absorbs.
        """
        normal = rec.normal
        scatter_direction = normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = normal

        return Ray(rec.at, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
