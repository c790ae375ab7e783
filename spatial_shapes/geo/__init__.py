"""Geometry for spatial filtering: ranges, distance calculators, shapes and relations."""

from .bbox import aggregate_bounds, export_bounding_box
from .distance import Bounds, DistanceCalculator, EuclideanCalculator, HaversineCalculator
from .intersect import combine_axes, relate_circle_rectangle, relate_circles, relate_rectangles
from .ranges import (
    FULL_LONGITUDE,
    LongitudeRange,
    Range,
    clamp_latitude,
    longitude_hull,
    normalize_longitude,
    normalize_longitude_span,
    relate_intervals,
)
from .shapes import Circle, Point, Rectangle, Shape, ShapeCollection

__all__ = [
    "Bounds",
    "DistanceCalculator",
    "EuclideanCalculator",
    "HaversineCalculator",
    "Range",
    "LongitudeRange",
    "FULL_LONGITUDE",
    "normalize_longitude",
    "normalize_longitude_span",
    "clamp_latitude",
    "relate_intervals",
    "longitude_hull",
    "combine_axes",
    "relate_rectangles",
    "relate_circle_rectangle",
    "relate_circles",
    "Point",
    "Rectangle",
    "Circle",
    "ShapeCollection",
    "Shape",
    "aggregate_bounds",
    "export_bounding_box",
]
