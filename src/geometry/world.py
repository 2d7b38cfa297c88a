# geometry/world.py
import logging
from typing import List

from core.ray import Ray
from geometry.hittable import Hit
from geometry.mesh import TriangleMesh

logger = logging.getLogger(__name__)


class World:
    """
    The ordered list of meshes making up a scene. It is filled before a
    render starts and only read while rendering.
    """
    def __init__(self):
        self.meshes: List[TriangleMesh] = []

    def add(self, mesh: TriangleMesh):
        self.meshes.append(mesh)
        logger.debug("Added mesh #%d with %d triangles (%r)",
                     len(self.meshes) - 1, len(mesh.triangles), mesh.material)

    @property
    def triangle_count(self) -> int:
        return sum(len(mesh.triangles) for mesh in self.meshes)

    def hit(self, ray: Ray) -> Hit:
        # Brute force over every mesh, keeping the hit with the largest z.
        closest = Hit()
        for mesh in self.meshes:
            rec = mesh.hit(ray)
            if rec.t > 0.0 and rec.at.z > closest.at.z:
                closest = rec
        return closest
