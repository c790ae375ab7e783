"""Bounding box aggregation and export for spatial indexing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from spatial_shapes.models import BoundingBox

from .distance import Bounds
from .ranges import LongitudeRange, longitude_hull

if TYPE_CHECKING:
    from .shapes import Rectangle, Shape


def aggregate_bounds(boxes: Sequence[Rectangle], geo: bool) -> Bounds:
    """
    Compute the extent covering every box.

    The Y extent is the lowest min_y to the highest max_y. For geographic
    boxes the X extent comes from ``longitude_hull`` so it may cross the
    dateline and does not depend on the order of ``boxes``.

    Args:
        boxes: Non-empty sequence of bounding boxes
        geo: Whether X is longitude

    Returns:
        (min_x, max_x, min_y, max_y)
    """
    if not boxes:
        raise ValueError("aggregate_bounds needs at least one box")

    min_y = min(box.min_y for box in boxes)
    max_y = max(box.max_y for box in boxes)
    if geo:
        hull = longitude_hull(LongitudeRange.from_rect(box) for box in boxes)
        return hull.min, hull.max, min_y, max_y
    return min(box.min_x for box in boxes), max(box.max_x for box in boxes), min_y, max_y


def export_bounding_box(shape: Shape) -> BoundingBox:
    """
    Export a shape's bounding box as plain fields.

    This is what an index stores: four numbers and a dateline flag that
    can each be searched on their own.
    """
    box = shape.bounding_box
    return BoundingBox(
        min_x=box.min_x,
        max_x=box.max_x,
        min_y=box.min_y,
        max_y=box.max_y,
        crosses_dateline=box.crosses_dateline,
    )
