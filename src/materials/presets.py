# materials/presets.py
from core.vector import Vector3
from materials.metal import Metal
from materials.lambertian import Lambertian

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Vector3(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.3)

    @staticmethod
    def mirror(color: Vector3) -> Metal:
        return Metal(color, fuzz=0.0)

class ColorPresets:
    """Named colors and shortcuts for diffuse materials."""
    WHITE = Vector3(1.0, 1.0, 1.0)
    GREY = Vector3(0.5, 0.5, 0.5)
    RED = Vector3(0.8, 0.2, 0.2)
    SAND = Vector3(0.8, 0.8, 0.4)
    ROSE = Vector3(0.89, 0.4, 0.4)
    SKY = Vector3(0.5, 0.7, 1.0)
    BLACK = Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        return Lambertian(color)
