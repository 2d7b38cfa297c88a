"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the source root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from core.vector import Vector3  # noqa: E402
from geometry.mesh import Triangle, TriangleMesh  # noqa: E402
from materials.lambertian import Lambertian  # noqa: E402


class ConstantRng:
    """Stand-in generator whose random() always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.value


class SequenceRng:
    """Stand-in generator replaying a fixed list of values for uniform()."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def uniform(self, low: float, high: float) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value

    def random(self) -> float:
        return self.uniform(0.0, 1.0)


class ForbiddenRng:
    """Fails the test if any randomness is consumed."""

    def random(self):
        raise AssertionError("random() should not be called")

    def uniform(self, low, high):
        raise AssertionError("uniform() should not be called")


@pytest.fixture
def zero_rng():
    return ConstantRng(0.0)


@pytest.fixture
def forbidden_rng():
    return ForbiddenRng()


@pytest.fixture
def sand():
    return Vector3(0.8, 0.8, 0.4)


@pytest.fixture
def facing_triangle():
    """Triangle in the z = -5 plane facing the camera at the origin."""
    return Triangle(Vector3(-1.0, -1.0, -5.0), Vector3(1.0, -1.0, -5.0), Vector3(0.0, 1.0, -5.0))


@pytest.fixture
def backdrop_mesh(sand):
    """One large triangle at z = -5 that covers the whole default viewport."""
    triangle = Triangle(Vector3(-10.0, -10.0, -5.0), Vector3(10.0, -10.0, -5.0), Vector3(0.0, 10.0, -5.0))
    return TriangleMesh([triangle], Lambertian(sand))
