"""Tests for Lambertian and Metal scattering."""

import pytest

from conftest import SequenceRng
from core.ray import Ray
from core.utils import reseed_thread_rng
from core.vector import Vector3
from geometry.hittable import Hit
from geometry.mesh import Triangle
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, MetalPresets

ORIGIN = Vector3(0.0, 0.0, 0.0)
UP = Vector3(0.0, 1.0, 0.0)


@pytest.fixture
def floor_hit():
    """A hit on a horizontal floor triangle whose normal points up."""
    triangle = Triangle(Vector3(-1.0, 0.0, 1.0), Vector3(1.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0),
                        normal=UP)
    return Hit(t=1.0, at=Vector3(0.0, 0.0, 0.0), triangle=triangle)


class TestMetal:
    def test_mirror_reflection_is_exact(self, floor_hit, forbidden_rng):
        albedo = Vector3(0.9, 0.6, 0.3)
        incoming = Ray(Vector3(-1.0, 1.0, 0.0), Vector3(1.0, -1.0, 0.0))
        result = Metal(albedo, 0.0).scatter(incoming, floor_hit, forbidden_rng)
        assert result is not None
        scattered, attenuation = result
        assert scattered.direction == Vector3(1.0, 1.0, 0.0)
        assert scattered.origin == floor_hit.at
        assert attenuation == albedo

    def test_unnormalized_direction_is_kept(self, floor_hit, forbidden_rng):
        d = Vector3(2.0, -3.0, 0.5)
        scattered, _ = Metal(Vector3(1.0, 1.0, 1.0)).scatter(Ray(ORIGIN, d), floor_hit, forbidden_rng)
        expected = d - UP * 2 * d.dot(UP)
        assert (scattered.direction.x, scattered.direction.y, scattered.direction.z) == pytest.approx(
            (expected.x, expected.y, expected.z))

    def test_reflection_below_surface_is_absorbed(self, floor_hit, forbidden_rng):
        # Arriving from below the floor reflects downward.
        incoming = Ray(Vector3(-1.0, -1.0, 0.0), Vector3(1.0, 1.0, 0.0))
        assert Metal(Vector3(1.0, 1.0, 1.0), 0.0).scatter(incoming, floor_hit, forbidden_rng) is None

    def test_grazing_reflection_is_absorbed(self, floor_hit, forbidden_rng):
        incoming = Ray(Vector3(-1.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0))
        assert Metal(Vector3(1.0, 1.0, 1.0), 0.0).scatter(incoming, floor_hit, forbidden_rng) is None

    def test_fuzz_is_clamped(self):
        assert Metal(Vector3(1.0, 1.0, 1.0), 2.5).fuzz == 1.0
        assert Metal(Vector3(1.0, 1.0, 1.0), -1.0).fuzz == 0.0

    def test_fuzz_offsets_by_exactly_fuzz(self, floor_hit):
        rng = reseed_thread_rng(11)
        incoming = Ray(Vector3(-1.0, 1.0, 0.0), Vector3(1.0, -1.0, 0.0))
        mirror = Vector3(1.0, 1.0, 0.0)
        metal = Metal(Vector3(1.0, 1.0, 1.0), 0.5)
        for _ in range(50):
            result = metal.scatter(incoming, floor_hit, rng)
            assert result is not None
            scattered, _ = result
            assert (scattered.direction - mirror).length() == pytest.approx(0.5)
            assert scattered.direction.dot(UP) > 0

    def test_full_fuzz_offset_is_unit_length(self, floor_hit):
        # Every draw lands inside the unit sphere, so the first one is used.
        rng = SequenceRng([0.1] * 3)
        incoming = Ray(Vector3(-1.0, 1.0, 0.0), Vector3(1.0, -1.0, 0.0))
        scattered, _ = Metal(Vector3(1.0, 1.0, 1.0), 1.0).scatter(incoming, floor_hit, rng)
        offset = scattered.direction - Vector3(1.0, 1.0, 0.0)
        assert offset.length() == pytest.approx(1.0)


class TestLambertian:
    def test_always_scatters_into_upper_hemisphere(self, floor_hit):
        rng = reseed_thread_rng(3)
        albedo = Vector3(0.8, 0.8, 0.4)
        material = Lambertian(albedo)
        incoming = Ray(Vector3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0))
        for _ in range(100):
            result = material.scatter(incoming, floor_hit, rng)
            assert result is not None
            scattered, attenuation = result
            assert attenuation == albedo
            assert scattered.origin == floor_hit.at
            assert scattered.direction.dot(UP) >= -1e-12

    def test_degenerate_direction_falls_back_to_normal(self, floor_hit):
        # The random unit vector comes out exactly opposite the normal.
        rng = SequenceRng([0.0, -0.5, 0.0])
        scattered, _ = Lambertian(Vector3(1.0, 1.0, 1.0)).scatter(
            Ray(Vector3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0)), floor_hit, rng)
        assert scattered.direction == UP

    def test_uses_interpolated_normal_on_smooth_triangles(self):
        side = Vector3(1.0, 0.0, 0.0)
        triangle = Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0),
                            normal=UP, normals=[side, side, side], smooth=True)
        hit = Hit(t=1.0, at=Vector3(0.2, 0.0, 0.2), triangle=triangle, u=0.2, v=0.2)
        rng = SequenceRng([0.0, 0.0, 0.5])
        scattered, _ = Lambertian(Vector3(1.0, 1.0, 1.0)).scatter(
            Ray(Vector3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0)), hit, rng)
        assert scattered.direction == Vector3(1.0, 0.0, 1.0)


class TestValues:
    def test_equality(self):
        assert Lambertian(Vector3(0.1, 0.2, 0.3)) == Lambertian(Vector3(0.1, 0.2, 0.3))
        assert Metal(Vector3(0.1, 0.2, 0.3), 0.2) != Metal(Vector3(0.1, 0.2, 0.3), 0.3)
        assert Lambertian(Vector3(0.1, 0.2, 0.3)) != Metal(Vector3(0.1, 0.2, 0.3))
        assert hash(Metal(Vector3(0.1, 0.2, 0.3), 0.2)) == hash(Metal(Vector3(0.1, 0.2, 0.3), 0.2))

    def test_presets(self):
        assert MetalPresets.mirror(ColorPresets.ROSE) == Metal(Vector3(0.89, 0.4, 0.4), 0.0)
        assert ColorPresets.matte(ColorPresets.SAND).albedo == Vector3(0.8, 0.8, 0.4)
        for preset in (MetalPresets.gold(), MetalPresets.silver(), MetalPresets.copper(),
                       MetalPresets.brushed_metal()):
            assert 0.0 < preset.fuzz <= 1.0

