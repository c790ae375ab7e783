"""Pairwise relation algorithms between rectangles and circles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from spatial_shapes.models import SpatialRelation

from .ranges import LongitudeRange, Range

if TYPE_CHECKING:
    from .shapes import Circle, Rectangle

CONTAINS = SpatialRelation.CONTAINS
WITHIN = SpatialRelation.WITHIN
INTERSECTS = SpatialRelation.INTERSECTS
DISJOINT = SpatialRelation.DISJOINT


def combine_axes(
    x_rel: SpatialRelation, y_rel: SpatialRelation, x_equal: bool, y_equal: bool
) -> SpatialRelation:
    """
    Combine per-axis relations of two axis-aligned boxes.

    When one axis is identical for both boxes, the other axis decides.
    """
    if x_rel is DISJOINT or y_rel is DISJOINT:
        return DISJOINT
    if x_rel is y_rel:
        return x_rel
    if x_equal:
        return y_rel
    if y_equal:
        return x_rel
    return INTERSECTS


def _x_range(rect: Rectangle, geo: bool) -> Range:
    if geo:
        return LongitudeRange(rect.min_x, rect.max_x)
    return Range(rect.min_x, rect.max_x)


def relate_rectangles(a: Rectangle, b: Rectangle) -> SpatialRelation:
    """
    Relation of rectangle ``a`` to rectangle ``b``.

    The Y axis is a plain interval comparison. For geographic rectangles
    the X axis is compared as longitude arcs, so spans crossing the
    dateline and spans meeting at +/-180 are handled.
    """
    y_rel = a.y_range.relate(b.y_range)
    if y_rel is DISJOINT:
        return DISJOINT

    geo = a.geo or b.geo
    a_x = _x_range(a, geo)
    b_x = _x_range(b, geo)
    x_rel = a_x.relate(b_x)
    if x_rel is DISJOINT:
        return DISJOINT

    x_equal = x_rel is CONTAINS and b_x.relate(a_x) is CONTAINS
    y_equal = a.min_y == b.min_y and a.max_y == b.max_y
    return combine_axes(x_rel, y_rel, x_equal, y_equal)


def relate_circle_rectangle(circle: Circle, rect: Rectangle) -> SpatialRelation:
    """
    Relation of a circle to a rectangle.

    The circle's bounding box is checked first: a disjoint box means a
    disjoint circle, and a box inside the rectangle means the circle is
    inside too. Otherwise the nearest and farthest points of the rectangle
    are measured against the radius. A zero-size rectangle is a point and
    is measured directly, with the same distance a point gets.
    """
    if rect.min_x == rect.max_x and rect.min_y == rect.max_y:
        return CONTAINS if circle.contains_xy(rect.min_x, rect.min_y) else DISJOINT

    bbox = circle.bounding_box
    bbox_rel = relate_rectangles(bbox, rect)
    if bbox_rel is DISJOINT or bbox_rel is WITHIN:
        return bbox_rel
    if bbox_rel is CONTAINS and relate_rectangles(rect, bbox) is CONTAINS:
        # rect is exactly the circle's bounding box
        return WITHIN

    calculator = circle.calculator
    x, y = circle.center.x, circle.center.y
    if not circle.reaches(calculator.min_distance_to_rect(x, y, rect)):
        return DISJOINT
    # a circle can only contain what its bounding box contains
    if bbox_rel is CONTAINS and circle.reaches(calculator.max_distance_to_rect(x, y, rect)):
        return CONTAINS
    return INTERSECTS


def relate_circles(a: Circle, b: Circle) -> SpatialRelation:
    """Relation of circle ``a`` to circle ``b``."""
    if relate_rectangles(a.bounding_box, b.bounding_box) is DISJOINT:
        return DISJOINT

    distance = a.calculator.distance(a.center, b.center)
    if distance > a.radius + b.radius:
        return DISJOINT
    if a.reaches(distance + b.radius):
        return CONTAINS
    if b.reaches(distance + a.radius):
        return WITHIN
    return INTERSECTS
