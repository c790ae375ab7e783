"""
Enumerations and plain data models shared across the package.

The shape types themselves live in ``spatial_shapes.geo.shapes``.
"""

from enum import Enum

from pydantic import BaseModel, Field

from spatial_shapes.constants import EARTH_MEAN_RADIUS_KM, EARTH_MEAN_RADIUS_MI


class DistanceUnit(str, Enum):
    """Distance unit of a spatial context; decides geo vs planar behaviour."""

    KILOMETERS = "kilometers"
    MILES = "miles"
    EUCLIDEAN = "euclidean"

    @property
    def is_geo(self) -> bool:
        return self is not DistanceUnit.EUCLIDEAN

    @property
    def earth_radius(self) -> float | None:
        """Radius of the earth in this unit, or None for planar units."""
        if self is DistanceUnit.KILOMETERS:
            return EARTH_MEAN_RADIUS_KM
        if self is DistanceUnit.MILES:
            return EARTH_MEAN_RADIUS_MI
        return None


class SpatialRelation(str, Enum):
    """Topological relation of one shape to another."""

    CONTAINS = "contains"
    WITHIN = "within"
    INTERSECTS = "intersects"
    DISJOINT = "disjoint"

    def transpose(self) -> "SpatialRelation":
        """The relation seen from the other shape."""
        if self is SpatialRelation.CONTAINS:
            return SpatialRelation.WITHIN
        if self is SpatialRelation.WITHIN:
            return SpatialRelation.CONTAINS
        return self

    def combine(self, other: "SpatialRelation") -> "SpatialRelation":
        """
        Fold the relations of two parts of a shape against the same other shape.

        Commutative and associative, so the result does not depend on the
        order parts are visited in:
        - X + X == X
        - DISJOINT + CONTAINS == CONTAINS
        - anything else == INTERSECTS
        """
        if self is other:
            return self
        if {self, other} == {SpatialRelation.DISJOINT, SpatialRelation.CONTAINS}:
            return SpatialRelation.CONTAINS
        return SpatialRelation.INTERSECTS

    @property
    def intersects(self) -> bool:
        """True for every relation except DISJOINT."""
        return self is not SpatialRelation.DISJOINT


class BoundingBox(BaseModel):
    """Bounding box fields exported for indexing as separate searchable values."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    crosses_dateline: bool = Field(
        default=False, description="True when min_x > max_x (span wraps past +/-180)"
    )
