"""Distance calculators: flat-plane Euclidean and spherical Haversine."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from spatial_shapes.constants import EARTH_MEAN_RADIUS_KM, GEO_MAX_X, GEO_MAX_Y, GEO_MIN_X, GEO_MIN_Y

from .ranges import LongitudeRange, clamp_latitude, normalize_longitude, normalize_longitude_span

if TYPE_CHECKING:
    from .shapes import Point, Rectangle

# (min_x, max_x, min_y, max_y)
Bounds = tuple[float, float, float, float]


class EuclideanCalculator(BaseModel):
    """Flat-plane distance. Coordinates and distances share one unit."""

    model_config = ConfigDict(frozen=True)

    type: Literal["euclidean"] = "euclidean"

    @property
    def is_geo(self) -> bool:
        return False

    def distance(self, a: Point, b: Point) -> float:
        return self.distance_xy(a.x, a.y, b.x, b.y)

    def distance_xy(self, x1: float, y1: float, x2: float, y2: float) -> float:
        return math.hypot(x2 - x1, y2 - y1)

    def distance_to_degrees(self, distance: float) -> float:
        return distance

    def degrees_to_distance(self, degrees: float) -> float:
        return degrees

    def bounding_box(self, x: float, y: float, radius: float) -> Bounds:
        return x - radius, x + radius, y - radius, y + radius

    def min_distance_to_rect(self, x: float, y: float, rect: Rectangle) -> float:
        dx = max(rect.min_x - x, 0.0, x - rect.max_x)
        dy = max(rect.min_y - y, 0.0, y - rect.max_y)
        return math.hypot(dx, dy)

    def max_distance_to_rect(self, x: float, y: float, rect: Rectangle) -> float:
        dx = max(abs(x - rect.min_x), abs(x - rect.max_x))
        dy = max(abs(y - rect.min_y), abs(y - rect.max_y))
        return math.hypot(dx, dy)

    def point_on_bearing(
        self, x: float, y: float, distance: float, bearing: float
    ) -> tuple[float, float]:
        """Point ``distance`` away along ``bearing`` (degrees clockwise from +y)."""
        angle = math.radians(bearing)
        return x + distance * math.sin(angle), y + distance * math.cos(angle)


class HaversineCalculator(BaseModel):
    """
    Great-circle distance on a sphere.

    Points are (x=longitude, y=latitude) in degrees; distances are in the
    unit of ``radius`` (kilometers for the default earth radius).
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["haversine"] = "haversine"
    radius: float = Field(default=EARTH_MEAN_RADIUS_KM, gt=0, description="Sphere radius")

    @property
    def is_geo(self) -> bool:
        return True

    def distance(self, a: Point, b: Point) -> float:
        return self.distance_xy(a.x, a.y, b.x, b.y)

    def distance_xy(self, x1: float, y1: float, x2: float, y2: float) -> float:
        """
        Calculate the great-circle distance between two points.

        Uses the Haversine formula for accuracy at all distances.
        """
        lat1 = math.radians(y1)
        lon1 = math.radians(x1)
        lat2 = math.radians(y2)
        lon2 = math.radians(x2)

        dlat = lat2 - lat1
        dlon = lon2 - lon1

        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        c = 2 * math.asin(math.sqrt(min(1.0, a)))

        return self.radius * c

    def distance_to_degrees(self, distance: float) -> float:
        return math.degrees(distance / self.radius)

    def degrees_to_distance(self, degrees: float) -> float:
        return math.radians(degrees) * self.radius

    def bounding_box(self, x: float, y: float, radius: float) -> Bounds:
        """
        Compute the bounding box of a circle on the sphere.

        Latitude extent is the angular radius either side of the center.
        Longitude half-width grows with latitude since meridians converge
        toward the poles. A circle reaching a pole spans every longitude.
        """
        dist_deg = self.distance_to_degrees(radius)
        if dist_deg >= 180.0:
            return GEO_MIN_X, GEO_MAX_X, GEO_MIN_Y, GEO_MAX_Y

        min_y = y - dist_deg
        max_y = y + dist_deg
        if min_y <= GEO_MIN_Y or max_y >= GEO_MAX_Y:
            return GEO_MIN_X, GEO_MAX_X, max(GEO_MIN_Y, min_y), min(GEO_MAX_Y, max_y)

        ratio = math.sin(math.radians(dist_deg)) / math.cos(math.radians(y))
        lon_delta = math.degrees(math.asin(min(1.0, ratio)))
        min_x, max_x = normalize_longitude_span(x - lon_delta, x + lon_delta)
        return min_x, max_x, min_y, max_y

    def min_distance_to_rect(self, x: float, y: float, rect: Rectangle) -> float:
        """Shortest distance from (x, y) to any point of ``rect``."""
        lon_range = LongitudeRange(rect.min_x, rect.max_x)
        if lon_range.contains(x):
            # along our own meridian; any other meridian is farther
            nearest_y = max(rect.min_y, min(rect.max_y, y))
            return self.degrees_to_distance(abs(y - nearest_y))

        dlon = min(_lon_delta(x, rect.min_x), _lon_delta(x, rect.max_x))
        peak = _closest_latitude(y, dlon)
        return min(
            self.distance_xy(x, y, x + dlon, lat) for lat in _candidates(rect, peak)
        )

    def max_distance_to_rect(self, x: float, y: float, rect: Rectangle) -> float:
        """Longest distance from (x, y) to any point of ``rect``."""
        lon_range = LongitudeRange(rect.min_x, rect.max_x)
        if lon_range.contains(normalize_longitude(x + 180.0)):
            dlon = 180.0
        else:
            dlon = max(_lon_delta(x, rect.min_x), _lon_delta(x, rect.max_x))
        peak = _closest_latitude(y, dlon)
        trough = peak - 180.0 if peak > 0 else peak + 180.0
        return max(
            self.distance_xy(x, y, x + dlon, lat) for lat in _candidates(rect, trough)
        )

    def point_on_bearing(
        self, x: float, y: float, distance: float, bearing: float
    ) -> tuple[float, float]:
        """Destination after travelling ``distance`` along ``bearing`` (degrees from north)."""
        lat1 = math.radians(y)
        lon1 = math.radians(x)
        brng = math.radians(bearing)
        ang = distance / self.radius

        sin_lat2 = math.sin(lat1) * math.cos(ang) + math.cos(lat1) * math.sin(ang) * math.cos(brng)
        lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
        lon2 = lon1 + math.atan2(
            math.sin(brng) * math.sin(ang) * math.cos(lat1),
            math.cos(ang) - math.sin(lat1) * math.sin(lat2),
        )
        return normalize_longitude(math.degrees(lon2)), clamp_latitude(math.degrees(lat2))


def _lon_delta(a: float, b: float) -> float:
    """Absolute longitude difference in [0, 180]."""
    return abs(normalize_longitude(b - a))


def _closest_latitude(lat0: float, dlon: float) -> float:
    """
    Latitude on the meridian ``dlon`` degrees away that is closest to ``lat0``.

    Along that meridian cos(distance) = A*sin(lat) + B*cos(lat), a sinusoid
    peaking at atan2(A, B). The peak may fall outside [-90, 90].
    """
    a = math.sin(math.radians(lat0))
    b = math.cos(math.radians(lat0)) * math.cos(math.radians(dlon))
    return math.degrees(math.atan2(a, b))


def _candidates(rect: Rectangle, extremum: float) -> list[float]:
    latitudes = [rect.min_y, rect.max_y]
    if rect.min_y < extremum < rect.max_y:
        latitudes.append(extremum)
    return latitudes


# Union of supported calculators; the ``type`` tag tells them apart in JSON.
DistanceCalculator = EuclideanCalculator | HaversineCalculator
