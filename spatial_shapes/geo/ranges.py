"""
Interval arithmetic on the line and on the circular longitude domain.

Longitudes live on a circle: ``-180`` and ``180`` are the same meridian,
and a ``LongitudeRange`` whose ``min`` is greater than its ``max`` runs
east from ``min``, across the dateline, to ``max``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from spatial_shapes.constants import GEO_MAX_X, GEO_MAX_Y, GEO_MIN_X, GEO_MIN_Y
from spatial_shapes.models import SpatialRelation

if TYPE_CHECKING:
    from .shapes import Rectangle

Interval = tuple[float, float]


def normalize_longitude(x: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    if GEO_MIN_X <= x < GEO_MAX_X:
        return x
    wrapped = ((x + 180.0) % 360.0) - 180.0
    # float modulo can return the divisor itself for tiny negative inputs
    if wrapped >= GEO_MAX_X:
        wrapped -= 360.0
    return wrapped


def clamp_latitude(y: float) -> float:
    """Clamp a latitude into [-90, 90]."""
    return max(GEO_MIN_Y, min(GEO_MAX_Y, y))


def normalize_longitude_span(min_x: float, max_x: float) -> Interval:
    """
    Normalize the edges of a longitude span.

    Spans 360 degrees or wider become the whole world ``(-180, 180)``.
    Otherwise both edges are wrapped into [-180, 180), except that an
    eastern edge landing on -180 is kept at +180 so ``(0, 180)`` stays
    a non-crossing span. ``min_x > max_x`` is left as is: it encodes a
    span crossing the dateline.
    """
    if max_x - min_x >= 360.0:
        return GEO_MIN_X, GEO_MAX_X
    min_x = normalize_longitude(min_x)
    max_x = normalize_longitude(max_x)
    if max_x == GEO_MIN_X and min_x != GEO_MIN_X:
        max_x = GEO_MAX_X
    return min_x, max_x


def relate_intervals(a_min: float, a_max: float, b_min: float, b_max: float) -> SpatialRelation:
    """Relation of closed interval ``a`` to closed interval ``b``."""
    if b_min > a_max or b_max < a_min:
        return SpatialRelation.DISJOINT
    if b_min >= a_min and b_max <= a_max:
        return SpatialRelation.CONTAINS
    if b_min <= a_min and b_max >= a_max:
        return SpatialRelation.WITHIN
    return SpatialRelation.INTERSECTS


def _on_dateline(interval: Interval) -> bool:
    return interval[0] == interval[1] and abs(interval[0]) == GEO_MAX_X


def _interval_covers(outer: Interval, inner: Interval) -> bool:
    if outer[0] <= inner[0] and inner[1] <= outer[1]:
        return True
    # the +/-180 meridian is covered by anything reaching either side of it
    return _on_dateline(inner) and (outer[0] == GEO_MIN_X or outer[1] == GEO_MAX_X)


def _intervals_overlap(a: Interval, b: Interval) -> bool:
    if a[0] <= b[1] and b[0] <= a[1]:
        return True
    return (a[1] == GEO_MAX_X and b[0] == GEO_MIN_X) or (b[1] == GEO_MAX_X and a[0] == GEO_MIN_X)


def _covers(outer: list[Interval], inner: list[Interval]) -> bool:
    return all(any(_interval_covers(o, i) for o in outer) for i in inner)


@dataclass(frozen=True)
class Range:
    """A closed interval ``[min, max]`` on the line."""

    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def center(self) -> float:
        return self.min / 2 + self.max / 2

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def relate(self, other: Range) -> SpatialRelation:
        return relate_intervals(self.min, self.max, other.min, other.max)

    def expand_to(self, other: Range) -> Range:
        """Smallest range covering both."""
        return Range(min(self.min, other.min), max(self.max, other.max))


@dataclass(frozen=True, eq=False)
class LongitudeRange(Range):
    """
    A longitude arc in degrees.

    ``min > max`` means the arc crosses the dateline. Two ranges are equal
    when they denote the same arc, whatever their raw encoding.
    """

    @classmethod
    def from_rect(cls, rect: Rectangle) -> LongitudeRange:
        return cls(rect.min_x, rect.max_x)

    @property
    def crosses_dateline(self) -> bool:
        return self.min > self.max

    @property
    def width(self) -> float:
        width = self.max - self.min
        if width < 0:
            width += 360.0
        return width

    @property
    def center(self) -> float:
        return normalize_longitude(self.min + self.width / 2)

    def intervals(self) -> list[Interval]:
        """The arc as one or two non-wrapping intervals within [-180, 180]."""
        if self.crosses_dateline:
            return [(self.min, GEO_MAX_X), (GEO_MIN_X, self.max)]
        return [(self.min, self.max)]

    def contains(self, value: float) -> bool:
        point = (value, value)
        return any(_interval_covers(interval, point) for interval in self.intervals())

    def relate(self, other: Range) -> SpatialRelation:
        mine = self.intervals()
        theirs = _as_longitude_range(other).intervals()
        if _covers(mine, theirs):
            return SpatialRelation.CONTAINS
        if _covers(theirs, mine):
            return SpatialRelation.WITHIN
        if any(_intervals_overlap(a, b) for a in mine for b in theirs):
            return SpatialRelation.INTERSECTS
        return SpatialRelation.DISJOINT

    def expand_to(self, other: Range) -> LongitudeRange:
        """Smallest arc covering both."""
        return longitude_hull([self, _as_longitude_range(other)])

    def _canonical(self) -> Interval:
        return normalize_longitude_span(self.min, self.max)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LongitudeRange):
            return NotImplemented
        return self._canonical() == other._canonical()

    def __hash__(self) -> int:
        return hash(self._canonical())


FULL_LONGITUDE = LongitudeRange(GEO_MIN_X, GEO_MAX_X)


def _as_longitude_range(value: Range) -> LongitudeRange:
    if isinstance(value, LongitudeRange):
        return value
    return LongitudeRange(value.min, value.max)


def longitude_hull(ranges: Iterable[LongitudeRange]) -> LongitudeRange:
    """
    Smallest arc covering every range (the gap algorithm).

    Every range is split into non-wrapping intervals and the intervals are
    merged. The largest stretch of the circle touched by none of them is
    left out; the rest of the circle is the answer. With no gap at all the
    result is the whole world. Only the merged union is inspected, so the
    input order never changes the result.
    """
    intervals = sorted(interval for lon_range in ranges for interval in lon_range.intervals())
    if not intervals:
        raise ValueError("longitude_hull needs at least one range")

    merged: list[list[float]] = [list(intervals[0])]
    for low, high in intervals[1:]:
        if low <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], high)
        else:
            merged.append([low, high])

    # the gap after the last interval wraps around to the first one
    last = len(merged) - 1
    best_gap = merged[0][0] + 360.0 - merged[last][1]
    best_index = last
    for i in range(last):
        gap = merged[i + 1][0] - merged[i][1]
        if gap > best_gap:
            best_gap, best_index = gap, i

    if best_gap <= 0:
        return FULL_LONGITUDE
    if best_index == last:
        return LongitudeRange(merged[0][0], merged[last][1])
    return LongitudeRange(merged[best_index + 1][0], merged[best_index][1])
