"""Spatial shapes: points, rectangles, circles and collections with dateline-aware relations."""

__version__ = "0.1.0"

from spatial_shapes.context import SpatialContext, new_context  # noqa: E402
from spatial_shapes.exceptions import (  # noqa: E402
    ConfigurationError,
    InvalidShapeError,
    ShapeParseError,
    SpatialError,
    UnsupportedOperationError,
)
from spatial_shapes.geo import Circle, Point, Rectangle, Shape, ShapeCollection  # noqa: E402
from spatial_shapes.models import BoundingBox, DistanceUnit, SpatialRelation  # noqa: E402

__all__ = [
    "__version__",
    "SpatialContext",
    "new_context",
    "Point",
    "Rectangle",
    "Circle",
    "ShapeCollection",
    "Shape",
    "DistanceUnit",
    "SpatialRelation",
    "BoundingBox",
    "SpatialError",
    "ConfigurationError",
    "InvalidShapeError",
    "ShapeParseError",
    "UnsupportedOperationError",
]
