"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Negative-radius (hollow) spheres
- Interval handling and near/far root selection
- Random rays: hit points lie on the sphere and inside the interval
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.surface import Hit


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self, gray):
        """Ray hitting sphere head-on from outside."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))

        hit = sphere.hit(ray, (0.001, 1000.0))

        assert hit is not None
        assert hit.t == pytest.approx(4.0)
        assert hit.point == pytest.approx((0.0, 0.0, 1.0))
        assert hit.normal == pytest.approx((0.0, 0.0, 1.0))
        assert hit.front_face is True
        assert hit.material is gray

    def test_miss(self, gray):
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vector(5.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))
        assert sphere.hit(ray, (0.001, 1000.0)) is None

    def test_ray_pointing_away(self, gray):
        """Both roots are behind the origin."""
        sphere = Sphere(Vector(0.0, 0.0, -5.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        assert sphere.hit(ray, (0.001, math.inf)) is None

    def test_inside_hits_back_face(self, gray):
        """Ray starting at the center hits the far side with a flipped normal."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))

        hit = sphere.hit(ray, (0.001, 1000.0))

        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        assert hit.normal == pytest.approx((0.0, 0.0, -1.0))
        assert hit.front_face is False

    def test_unnormalized_direction(self, gray):
        sphere = Sphere(Vector(0.0, 0.0, -3.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -4.0))
        hit = sphere.hit(ray, (0.001, 1000.0))
        assert hit.t == pytest.approx(0.5)
        assert hit.point == pytest.approx((0.0, 0.0, -2.0))

    def test_far_root_when_near_root_below_range(self, gray):
        sphere = Sphere(Vector(0.0, 0.0, -3.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))
        hit = sphere.hit(ray, (2.5, 1000.0))
        assert hit.t == pytest.approx(4.0)
        assert hit.front_face is False

    def test_no_hit_beyond_t_max(self, gray):
        sphere = Sphere(Vector(0.0, 0.0, -3.0), 1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))
        assert sphere.hit(ray, (0.001, 1.5)) is None

    def test_tangent_ray(self, gray):
        """A grazing ray touches the sphere at exactly one point."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 1.0, gray)
        ray = Ray(Vector(1.0, 0.0, -5.0), Vector(0.0, 0.0, 1.0))
        hit = sphere.hit(ray, (0.001, 1000.0))
        assert hit is not None
        assert hit.t == pytest.approx(5.0)
        assert hit.point == pytest.approx((1.0, 0.0, 0.0))

    def test_distant_small_sphere(self, gray):
        """Rounding at long range must not break the unit normal."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 0.05, gray)
        ray = Ray(Vector(0.0, 0.01, 1e5), Vector(0.0, 0.0, -1.0))

        hit = sphere.hit(ray, (0.001, math.inf))

        assert hit is not None
        assert hit.t == pytest.approx(1e5 - math.sqrt(0.05**2 - 0.01**2))
        assert hit.normal.length() == pytest.approx(1.0, abs=1e-12)
        assert hit.front_face is True
        assert hit.normal.z > 0.0

    def test_distant_hits_never_abort(self, rng, gray):
        sphere = Sphere(Vector(0.0, 0.0, 0.0), 0.05, gray)
        for _ in range(200):
            offset = Vector.random(rng, -0.02, 0.02)
            ray = Ray(Vector(offset.x, offset.y, 1e6), Vector(0.0, 0.0, -1.0))
            hit = sphere.hit(ray, (0.001, math.inf))
            assert hit is not None
            assert hit.normal.length() == pytest.approx(1.0, abs=1e-12)

    def test_rejects_zero_radius(self, gray):
        with pytest.raises(ValueError, match="non-zero"):
            Sphere(Vector(0.0, 0.0, 0.0), 0.0, gray)


class TestHollowSphere:
    """Tests for negative-radius spheres."""

    def test_outward_normal_points_inward(self, gray):
        """From outside, a negative radius reports a back-face hit."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), -1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))

        hit = sphere.hit(ray, (0.001, 1000.0))

        assert hit.t == pytest.approx(4.0)
        assert hit.front_face is False
        # Reported normal still opposes the ray
        assert hit.normal == pytest.approx((0.0, 0.0, 1.0))

    def test_inside_negative_radius_is_front_face(self, gray):
        """From inside, the inward-pointing outward normal faces the ray."""
        sphere = Sphere(Vector(0.0, 0.0, 0.0), -1.0, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))

        hit = sphere.hit(ray, (0.001, 1000.0))

        assert hit.t == pytest.approx(1.0)
        assert hit.front_face is True
        assert hit.normal == pytest.approx((0.0, 0.0, -1.0))

    def test_near_root_first(self, gray):
        """Near root is taken before far root regardless of radius sign."""
        sphere = Sphere(Vector(0.0, 0.0, -3.0), -0.5, gray)
        ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))
        hit = sphere.hit(ray, (0.001, 1000.0))
        assert hit.t == pytest.approx(2.5)


class TestSphereProperties:
    """Randomized checks of intersection invariants."""

    @pytest.mark.parametrize("radius", [0.5, 2.0, -0.7])
    def test_hit_point_on_surface_and_t_in_range(self, rng, gray, radius):
        center = Vector(0.3, -0.2, -2.0)
        sphere = Sphere(center, radius, gray)
        t_range = (0.001, 50.0)
        hits = 0

        for _ in range(500):
            origin = Vector.random(rng, -3.0, 3.0)
            direction = Vector.random(rng, -1.0, 1.0)
            ray = Ray(origin, direction)
            hit = sphere.hit(ray, t_range)
            if hit is None:
                continue
            hits += 1
            assert t_range[0] <= hit.t <= t_range[1]
            assert (hit.point - center).length() == pytest.approx(abs(radius), rel=1e-6)
            assert hit.normal.length() == pytest.approx(1.0)
            assert hit.normal.dot(ray.direction) <= 0.0

        assert hits > 0

    def test_front_face_from_outside_normal_points_away(self, rng, gray):
        center = Vector(0.0, 0.0, 0.0)
        sphere = Sphere(center, 1.0, gray)
        for _ in range(200):
            origin = random_point_outside(rng, 1.5)
            ray = Ray(origin, center - origin + Vector.random(rng, -0.3, 0.3))
            hit = sphere.hit(ray, (0.001, math.inf))
            if hit is None:
                continue
            assert hit.front_face is True
            assert hit.normal.dot(hit.point - center) > 0.0


def random_point_outside(rng, distance):
    return Vector.random(rng, -1.0, 1.0).unit() * distance


class TestHitRecord:
    """Tests for Hit construction."""

    def test_front_face_keeps_normal(self, gray):
        ray = Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0))
        hit = Hit.from_outward_normal(ray, Vector(0.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0), gray, 1.0)
        assert hit.front_face is True
        assert hit.normal == Vector(0.0, 1.0, 0.0)

    def test_back_face_flips_normal(self, gray):
        ray = Ray(Vector(0.0, -1.0, 0.0), Vector(0.0, 1.0, 0.0))
        hit = Hit.from_outward_normal(ray, Vector(0.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0), gray, 1.0)
        assert hit.front_face is False
        assert hit.normal == Vector(0.0, -1.0, 0.0)

    def test_rejects_non_unit_outward_normal(self, gray):
        ray = Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0))
        with pytest.raises(AssertionError):
            Hit.from_outward_normal(ray, Vector(0.0, 0.0, 0.0), Vector(0.0, 2.0, 0.0), gray, 1.0)
