"""
Shape value types.

Shapes are frozen pydantic models, so they are hashable, safe to share
between threads and serialize with a ``type`` tag. Build them through a
``SpatialContext`` so coordinates are normalized for its world.
"""

from __future__ import annotations

import math
from functools import cached_property
from typing import TYPE_CHECKING, Any, Literal, assert_never

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator

from spatial_shapes.constants import EDGE_TOLERANCE
from spatial_shapes.exceptions import InvalidShapeError
from spatial_shapes.models import SpatialRelation

from .bbox import aggregate_bounds
from .distance import EuclideanCalculator, HaversineCalculator
from .intersect import relate_circle_rectangle, relate_circles, relate_rectangles
from .ranges import LongitudeRange, Range

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext

CONTAINS = SpatialRelation.CONTAINS
WITHIN = SpatialRelation.WITHIN
INTERSECTS = SpatialRelation.INTERSECTS
DISJOINT = SpatialRelation.DISJOINT


def _require_finite(*values: float) -> None:
    if not all(math.isfinite(value) for value in values):
        raise InvalidShapeError(f"coordinates must be finite numbers, got {values}")


class Point(BaseModel):
    """A single (x, y) position."""

    model_config = ConfigDict(frozen=True)

    type: Literal["point"] = "point"
    x: float
    y: float

    @model_validator(mode="after")
    def check_finite(self) -> Point:
        _require_finite(self.x, self.y)
        return self

    @property
    def bounding_box(self) -> Rectangle:
        return Rectangle(min_x=self.x, max_x=self.x, min_y=self.y, max_y=self.y)

    def relate(self, other: Shape) -> SpatialRelation:
        match other:
            case Point():
                same = self.x == other.x and self.y == other.y
                return CONTAINS if same else DISJOINT
            case Rectangle() | Circle() | ShapeCollection():
                return other.relate(self).transpose()
            case _:
                assert_never(other)


class Rectangle(BaseModel):
    """
    An axis-aligned rectangle.

    For geographic rectangles ``min_x > max_x`` is valid and means the
    rectangle crosses the dateline. ``min_y <= max_y`` always holds.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["rectangle"] = "rectangle"
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    geo: bool = False

    @model_validator(mode="after")
    def check_extent(self) -> Rectangle:
        _require_finite(self.min_x, self.max_x, self.min_y, self.max_y)
        if self.min_y > self.max_y:
            raise InvalidShapeError(f"min_y {self.min_y} is greater than max_y {self.max_y}")
        if self.min_x > self.max_x and not self.geo:
            raise InvalidShapeError(
                f"min_x {self.min_x} is greater than max_x {self.max_x} in a planar rectangle"
            )
        return self

    @property
    def crosses_dateline(self) -> bool:
        return self.min_x > self.max_x

    @property
    def x_range(self) -> Range:
        if self.geo:
            return LongitudeRange(self.min_x, self.max_x)
        return Range(self.min_x, self.max_x)

    @property
    def y_range(self) -> Range:
        return Range(self.min_y, self.max_y)

    @property
    def width(self) -> float:
        return self.x_range.width

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(x=self.x_range.center, y=self.y_range.center)

    @property
    def bounding_box(self) -> Rectangle:
        return self

    def relate_x_range(self, other: Range) -> SpatialRelation:
        """Relation of this rectangle's X extent to ``other``, as longitudes when geographic."""
        return self.x_range.relate(other)

    def relate_y_range(self, other: Range) -> SpatialRelation:
        return self.y_range.relate(other)

    def relate(self, other: Shape) -> SpatialRelation:
        match other:
            case Point():
                return relate_rectangles(self, other.bounding_box)
            case Rectangle():
                return relate_rectangles(self, other)
            case Circle() | ShapeCollection():
                return other.relate(self).transpose()
            case _:
                assert_never(other)


class Circle(BaseModel):
    """
    A circle: every point within ``radius`` of ``center``.

    The radius is in the calculator's distance unit. The boundary is
    inclusive: a point exactly ``radius`` away is inside.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["circle"] = "circle"
    center: Point
    radius: float
    calculator: EuclideanCalculator | HaversineCalculator

    @model_validator(mode="after")
    def check_radius(self) -> Circle:
        if not math.isfinite(self.radius) or self.radius < 0:
            raise InvalidShapeError(f"radius must be a finite, non-negative number, got {self.radius}")
        return self

    @cached_property
    def bounding_box(self) -> Rectangle:
        min_x, max_x, min_y, max_y = self.calculator.bounding_box(
            self.center.x, self.center.y, self.radius
        )
        return Rectangle(
            min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=self.calculator.is_geo
        )

    def reaches(self, distance: float) -> bool:
        """Whether ``distance`` from the center is on or inside the edge."""
        return distance <= self.radius * (1 + EDGE_TOLERANCE)

    def contains_xy(self, x: float, y: float) -> bool:
        return self.reaches(self.calculator.distance_xy(self.center.x, self.center.y, x, y))

    def relate(self, other: Shape) -> SpatialRelation:
        match other:
            case Point():
                # same path as the point's zero-size rectangle
                return relate_circle_rectangle(self, other.bounding_box)
            case Rectangle():
                return relate_circle_rectangle(self, other)
            case Circle():
                return relate_circles(self, other)
            case ShapeCollection():
                return other.relate(self).transpose()
            case _:
                assert_never(other)


class ShapeCollection(BaseModel):
    """
    A non-empty, ordered collection of points, rectangles and circles.

    The collection keeps a reference to the context that built it; the
    context decides whether longitudes wrap and whether members may
    overlap.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["collection"] = "collection"
    shapes: tuple[Point | Rectangle | Circle, ...]

    _context: SpatialContext = PrivateAttr()

    def __init__(self, context: SpatialContext, **data: Any) -> None:
        super().__init__(**data)
        self._context = context

    @model_validator(mode="after")
    def check_not_empty(self) -> ShapeCollection:
        if not self.shapes:
            raise InvalidShapeError("a shape collection needs at least one shape")
        return self

    @property
    def context(self) -> SpatialContext:
        return self._context

    @property
    def relate_contains_short_circuits(self) -> bool:
        """
        Whether one member containing the other shape settles the answer.

        True unless the context allows members to overlap. With overlap a
        member may be WITHIN the other shape while another CONTAINS it,
        which folds to INTERSECTS.
        """
        return not self._context.allow_multi_overlap

    @cached_property
    def bounding_box(self) -> Rectangle:
        geo = self._context.is_geo
        min_x, max_x, min_y, max_y = aggregate_bounds(
            [shape.bounding_box for shape in self.shapes], geo
        )
        return Rectangle(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=geo)

    def relate(self, other: Shape) -> SpatialRelation:
        bbox_rel = self.bounding_box.relate(other)
        if bbox_rel is DISJOINT or bbox_rel is WITHIN:
            return bbox_rel

        short_circuit = isinstance(other, Point) or self.relate_contains_short_circuits
        first, *rest = self.shapes
        result = first.relate(other)
        if result is CONTAINS and short_circuit:
            return CONTAINS
        for shape in rest:
            relation = shape.relate(other)
            if relation is CONTAINS and short_circuit:
                return CONTAINS
            result = result.combine(relation)
            # a later CONTAINS can still win when short-circuiting
            if result is INTERSECTS and not short_circuit:
                return INTERSECTS
        return result


# Closed set of shape kinds; relate() dispatch matches on every member.
Shape = Point | Rectangle | Circle | ShapeCollection
