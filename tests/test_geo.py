"""Tests for distance calculators."""

import math

import pytest

from spatial_shapes.constants import EARTH_MEAN_RADIUS_KM
from spatial_shapes.geo import EuclideanCalculator, HaversineCalculator, Point, Rectangle

ONE_DEGREE_KM = 2 * math.pi * EARTH_MEAN_RADIUS_KM / 360


def geo_rect(min_x, max_x, min_y, max_y):
    return Rectangle(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=True)


class TestEuclideanCalculator:
    """Tests for flat-plane distance."""

    def test_distance(self):
        """3-4-5 triangle."""
        calc = EuclideanCalculator()
        assert calc.distance(Point(x=0, y=0), Point(x=3, y=4)) == 5

    def test_symmetric_and_zero(self):
        """Distance is symmetric and zero only for equal points."""
        calc = EuclideanCalculator()
        a, b = Point(x=-2.5, y=7), Point(x=4, y=-1)
        assert calc.distance(a, b) == calc.distance(b, a)
        assert calc.distance(a, a) == 0
        assert not calc.is_geo

    def test_bounding_box(self):
        """A circle's box extends the radius on every side."""
        assert EuclideanCalculator().bounding_box(1, 2, 3) == (-2, 4, -1, 5)

    def test_distances_to_rect(self):
        """Nearest and farthest points of a rectangle."""
        calc = EuclideanCalculator()
        rect = Rectangle(min_x=3, max_x=6, min_y=4, max_y=8)
        assert calc.min_distance_to_rect(0, 0, rect) == 5
        assert calc.max_distance_to_rect(0, 0, rect) == 10
        assert calc.min_distance_to_rect(4, 5, rect) == 0

    def test_point_on_bearing(self):
        """Bearings are measured clockwise from +y."""
        calc = EuclideanCalculator()
        x, y = calc.point_on_bearing(0, 0, 2, 90)
        assert x == pytest.approx(2)
        assert y == pytest.approx(0, abs=1e-12)
        x, y = calc.point_on_bearing(1, 1, 1, 0)
        assert (x, y) == pytest.approx((1, 2))


class TestHaversineCalculator:
    """Tests for great-circle distance."""

    def test_same_point(self):
        """Distance from a point to itself should be zero."""
        calc = HaversineCalculator()
        p = Point(x=151.2153, y=-33.8568)
        assert calc.distance(p, p) == pytest.approx(0, abs=1e-9)

    def test_one_degree_on_equator(self):
        """One degree of longitude on the equator."""
        calc = HaversineCalculator()
        assert calc.distance_xy(0, 0, 1, 0) == pytest.approx(ONE_DEGREE_KM)

    def test_across_dateline(self):
        """Points either side of the dateline are close."""
        calc = HaversineCalculator()
        assert calc.distance_xy(179.5, 0, -179.5, 0) == pytest.approx(ONE_DEGREE_KM)

    def test_pole_to_pole(self):
        """Pole to pole is half the circumference."""
        calc = HaversineCalculator()
        assert calc.distance_xy(0, 90, 0, -90) == pytest.approx(math.pi * EARTH_MEAN_RADIUS_KM)

    def test_degree_conversion(self):
        """Degrees and distances convert both ways."""
        calc = HaversineCalculator()
        assert calc.degrees_to_distance(1) == pytest.approx(ONE_DEGREE_KM)
        assert calc.distance_to_degrees(calc.degrees_to_distance(12.5)) == pytest.approx(12.5)

    def test_radius_must_be_positive(self):
        """A sphere needs a positive radius."""
        with pytest.raises(ValueError):
            HaversineCalculator(radius=0)


class TestHaversineBoundingBox:
    """Tests for circle bounding boxes on the sphere."""

    def test_equator(self):
        """On the equator the box is as wide as it is tall."""
        calc = HaversineCalculator()
        box = calc.bounding_box(0, 0, calc.degrees_to_distance(10))
        assert box == pytest.approx((-10, 10, -10, 10))

    def test_wider_at_latitude(self):
        """Longitude extent grows away from the equator."""
        calc = HaversineCalculator()
        min_x, max_x, min_y, max_y = calc.bounding_box(0, 60, calc.degrees_to_distance(5))
        assert (min_y, max_y) == pytest.approx((55, 65))
        assert max_x - min_x > 10
        # exact half-width is asin(sin(5) / cos(60))
        half = math.degrees(math.asin(math.sin(math.radians(5)) / math.cos(math.radians(60))))
        assert max_x == pytest.approx(half)

    def test_crosses_dateline(self):
        """A circle near the dateline gets a crossing box."""
        calc = HaversineCalculator()
        min_x, max_x, _, _ = calc.bounding_box(175, 0, calc.degrees_to_distance(10))
        assert min_x == pytest.approx(165)
        assert max_x == pytest.approx(-175)

    def test_reaching_pole(self):
        """A circle over a pole spans every longitude."""
        calc = HaversineCalculator()
        box = calc.bounding_box(30, 85, calc.degrees_to_distance(10))
        assert box == pytest.approx((-180, 180, 75, 90))

    def test_huge_circle(self):
        """A circle of 180 degrees or more covers the world."""
        calc = HaversineCalculator()
        assert calc.bounding_box(10, 10, calc.degrees_to_distance(200)) == (-180, 180, -90, 90)


class TestHaversineRectDistances:
    """Tests for nearest and farthest distances to a rectangle."""

    def test_inside(self):
        """A point inside the rectangle is at distance zero."""
        calc = HaversineCalculator()
        assert calc.min_distance_to_rect(5, 5, geo_rect(0, 10, 0, 10)) == 0

    def test_same_meridian(self):
        """Directly below a rectangle the nearest point is straight north."""
        calc = HaversineCalculator()
        assert calc.min_distance_to_rect(5, -10, geo_rect(0, 10, 0, 10)) == pytest.approx(
            10 * ONE_DEGREE_KM
        )

    def test_to_the_east(self):
        """Along the equator the nearest point is on the nearest edge."""
        calc = HaversineCalculator()
        distance = calc.min_distance_to_rect(0, 0, geo_rect(10, 20, -5, 5))
        assert distance == pytest.approx(10 * ONE_DEGREE_KM)

    def test_across_dateline(self):
        """The nearest edge may be on the other side of the dateline."""
        calc = HaversineCalculator()
        distance = calc.min_distance_to_rect(-175, 0, geo_rect(170, 178, -5, 5))
        assert distance == pytest.approx(7 * ONE_DEGREE_KM)

    def test_farthest_includes_antipode(self):
        """A rectangle holding the antipode is half the circumference away at most."""
        calc = HaversineCalculator()
        distance = calc.max_distance_to_rect(0, 0, geo_rect(170, -170, -10, 10))
        assert distance == pytest.approx(180 * ONE_DEGREE_KM)

    def test_farthest_corner(self):
        """Farthest point of a small rectangle is never nearer than its nearest point."""
        calc = HaversineCalculator()
        rect = geo_rect(10, 20, 10, 20)
        far = calc.max_distance_to_rect(0, 0, rect)
        assert far == pytest.approx(calc.distance_xy(0, 0, 20, 20))
        assert far > calc.min_distance_to_rect(0, 0, rect)


class TestPointOnBearing:
    """Tests for destination points."""

    def test_north(self):
        """Travelling north raises the latitude."""
        calc = HaversineCalculator()
        x, y = calc.point_on_bearing(0, 0, calc.degrees_to_distance(10), 0)
        assert (x, y) == pytest.approx((0, 10), abs=1e-9)

    def test_east_across_dateline(self):
        """Travelling east past 180 wraps the longitude."""
        calc = HaversineCalculator()
        x, y = calc.point_on_bearing(175, 0, calc.degrees_to_distance(10), 90)
        assert x == pytest.approx(-175)
        assert y == pytest.approx(0, abs=1e-9)

    def test_round_trip_distance(self):
        """The destination is the travelled distance away."""
        calc = HaversineCalculator()
        x, y = calc.point_on_bearing(12, 34, 500, 123)
        assert calc.distance_xy(12, 34, x, y) == pytest.approx(500)
