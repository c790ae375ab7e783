"""
Request and response models for the HTTP API.

Shapes travel as shape text on the way in and as tagged JSON on the way
out, next to their exported bounding boxes.
"""

from pydantic import BaseModel, Field

from spatial_shapes.geo import Circle, Point, Rectangle
from spatial_shapes.models import BoundingBox, DistanceUnit, SpatialRelation

MAX_TEXT_LENGTH = 4096


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


class ParseRequest(BaseModel):
    """Shape text to parse."""

    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Shape text")


class ParseResponse(BaseModel):
    """A parsed shape with its canonical text and bounding box."""

    shape: Point | Rectangle | Circle = Field(..., discriminator="type")
    text: str = Field(..., description="Canonical shape text")
    bounding_box: BoundingBox


# -----------------------------------------------------------------------------
# Relations
# -----------------------------------------------------------------------------


class RelateRequest(BaseModel):
    """Two shapes, as text, to relate."""

    shape: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)
    other: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)


class RelateResponse(BaseModel):
    """Relation of ``shape`` to ``other``."""

    relation: SpatialRelation
    intersects: bool
    shape_bounding_box: BoundingBox
    other_bounding_box: BoundingBox


# -----------------------------------------------------------------------------
# Context
# -----------------------------------------------------------------------------


class ContextInfo(BaseModel):
    """The spatial context the server builds shapes with."""

    unit: DistanceUnit
    geo: bool
    calculator: str
    world_bounds: BoundingBox
    allow_multi_overlap: bool
