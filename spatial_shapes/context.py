"""
Spatial context: the root policy object for shape construction.

A context fixes the distance unit, the distance calculator and the world
bounds. It normalizes raw coordinates, builds every shape and parses the
minimal shape text grammar:

    "<x> <y>"                          Point
    "<lat>,<lon>"                      Point, latitude first
    "<minX> <minY> <maxX> <maxY>"      Rectangle
    "Circle(<point> <radius>)"         Circle; radius may be "d=<r>" or "distance=<r>"

Contexts are immutable and meant to be built once and passed to whatever
needs to make shapes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn, assert_never

from spatial_shapes.constants import (
    GEO_MAX_X,
    GEO_MAX_Y,
    GEO_MIN_X,
    GEO_MIN_Y,
    PLANAR_MAX,
    TEXT_PRECISION,
)
from spatial_shapes.exceptions import (
    ConfigurationError,
    InvalidShapeError,
    ShapeParseError,
    UnsupportedOperationError,
)
from spatial_shapes.geo import (
    Circle,
    DistanceCalculator,
    EuclideanCalculator,
    HaversineCalculator,
    Point,
    Rectangle,
    Shape,
    ShapeCollection,
    clamp_latitude,
    normalize_longitude,
    normalize_longitude_span,
)
from spatial_shapes.models import DistanceUnit

if TYPE_CHECKING:
    from spatial_shapes.config import Settings

logger = logging.getLogger(__name__)

CIRCLE_PREFIX = "Circle("

# WKT keywords that need a full geometry engine
UNSUPPORTED_KEYWORDS = frozenset(
    {
        "POINT",
        "LINESTRING",
        "POLYGON",
        "MULTIPOINT",
        "MULTILINESTRING",
        "MULTIPOLYGON",
        "GEOMETRYCOLLECTION",
        "ENVELOPE",
        "BUFFER",
    }
)

DISTANCE_KEYS = ("d", "distance")


def _parse_number(token: str, text: str) -> float:
    try:
        return float(token)
    except ValueError as err:
        raise ShapeParseError(f"not a number: {token!r}", text=text) from err


def _format_number(value: float) -> str:
    return f"{value:.{TEXT_PRECISION}f}"


@dataclass(frozen=True)
class SpatialContext:
    """
    Unit, calculator and world bounds shared by every shape built from it.

    Args:
        unit: Distance unit. KILOMETERS and MILES make a geographic context
            where x is longitude and y is latitude; EUCLIDEAN is planar.
        calculator: Distance calculator; defaults from ``unit``.
        world_bounds: World extent; defaults from ``unit``. Must not cross
            the dateline, and must be the whole globe for geographic units.
        allow_multi_overlap: Whether members of a shape collection may
            overlap each other.

    Raises:
        ConfigurationError: If the combination is invalid.
    """

    unit: DistanceUnit | None = DistanceUnit.KILOMETERS
    calculator: DistanceCalculator | None = None
    world_bounds: Rectangle | None = None
    allow_multi_overlap: bool = False

    def __post_init__(self) -> None:
        unit = self.unit
        calculator = self.calculator
        if unit is None:
            if calculator is not None:
                self._fail("a calculator was given without a distance unit")
            unit = DistanceUnit.KILOMETERS
        if calculator is None:
            if unit.is_geo:
                calculator = HaversineCalculator(radius=unit.earth_radius)
            else:
                calculator = EuclideanCalculator()
        elif calculator.is_geo != unit.is_geo:
            self._fail(f"calculator {calculator.type!r} does not fit unit {unit.value!r}")

        object.__setattr__(self, "unit", unit)
        object.__setattr__(self, "calculator", calculator)
        object.__setattr__(self, "world_bounds", self._resolve_world_bounds())

        logger.debug(
            f"Spatial context: unit={unit.value} calculator={calculator!r} "
            f"world={self.world_bounds!r} allow_multi_overlap={self.allow_multi_overlap}"
        )

    def _resolve_world_bounds(self) -> Rectangle:
        if self.world_bounds is None:
            if self.is_geo:
                return Rectangle(
                    min_x=GEO_MIN_X, max_x=GEO_MAX_X, min_y=GEO_MIN_Y, max_y=GEO_MAX_Y, geo=True
                )
            return Rectangle(min_x=-PLANAR_MAX, max_x=PLANAR_MAX, min_y=-PLANAR_MAX, max_y=PLANAR_MAX)

        bounds = self.world_bounds
        try:
            world = self.make_rect(bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y)
        except InvalidShapeError as err:
            self._fail(f"invalid world bounds: {err.message}")
        if world.crosses_dateline:
            self._fail(f"world bounds must not cross the dateline: {world!r}")
        if self.is_geo and (world.min_x, world.max_x, world.min_y, world.max_y) != (
            GEO_MIN_X,
            GEO_MAX_X,
            GEO_MIN_Y,
            GEO_MAX_Y,
        ):
            self._fail(f"geographic world bounds must be the whole globe, got {world!r}")
        return world

    @staticmethod
    def _fail(message: str) -> NoReturn:
        logger.error(f"Invalid spatial context: {message}")
        raise ConfigurationError(message)

    @classmethod
    def from_settings(cls, settings: Settings) -> SpatialContext:
        """Build a context from application settings."""
        world_bounds = None
        if settings.world_bounds:
            tokens = settings.world_bounds.split()
            if len(tokens) != 4:
                raise ConfigurationError(
                    f"world_bounds must be 'minX minY maxX maxY', got {settings.world_bounds!r}"
                )
            try:
                min_x, min_y, max_x, max_y = (float(token) for token in tokens)
                world_bounds = Rectangle(
                    min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=settings.unit.is_geo
                )
            except (ValueError, InvalidShapeError) as err:
                raise ConfigurationError(f"invalid world_bounds {settings.world_bounds!r}: {err}") from err
        return cls(
            unit=settings.unit,
            world_bounds=world_bounds,
            allow_multi_overlap=settings.allow_multi_overlap,
        )

    @property
    def is_geo(self) -> bool:
        return self.unit.is_geo

    # -------------------------------------------------------------------------
    # Normalization
    # -------------------------------------------------------------------------

    def norm_x(self, x: float) -> float:
        """Wrap a longitude into [-180, 180); planar values pass through."""
        return normalize_longitude(x) if self.is_geo else x

    def norm_y(self, y: float) -> float:
        """Clamp a latitude into [-90, 90]; planar values pass through."""
        return clamp_latitude(y) if self.is_geo else y

    # -------------------------------------------------------------------------
    # Shape factories
    # -------------------------------------------------------------------------

    def make_point(self, x: float, y: float) -> Point:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidShapeError(f"point coordinates must be finite, got ({x}, {y})")
        return Point(x=self.norm_x(x), y=self.norm_y(y))

    def make_rect(self, min_x: float, max_x: float, min_y: float, max_y: float) -> Rectangle:
        """
        Build a rectangle.

        For geographic contexts ``min_x > max_x`` is kept as a rectangle
        crossing the dateline; the edges are never swapped.
        """
        if not all(math.isfinite(value) for value in (min_x, max_x, min_y, max_y)):
            raise InvalidShapeError(
                f"rectangle edges must be finite, got ({min_x}, {max_x}, {min_y}, {max_y})"
            )
        if self.is_geo:
            min_x, max_x = normalize_longitude_span(min_x, max_x)
            min_y, max_y = self.norm_y(min_y), self.norm_y(max_y)
        return Rectangle(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=self.is_geo)

    def make_rect_from_points(self, lower_left: Point, upper_right: Point) -> Rectangle:
        return self.make_rect(lower_left.x, upper_right.x, lower_left.y, upper_right.y)

    def make_circle(self, center: Point | tuple[float, float], distance: float) -> Circle:
        """
        Build a circle around ``center``.

        ``distance`` is in this context's unit: kilometers, miles, or
        coordinate units for planar contexts.
        """
        x, y = (center.x, center.y) if isinstance(center, Point) else center
        return Circle(center=self.make_point(x, y), radius=distance, calculator=self.calculator)

    def make_collection(self, shapes: Iterable[Point | Rectangle | Circle]) -> ShapeCollection:
        members = tuple(shapes)
        for member in members:
            if isinstance(member, ShapeCollection):
                raise InvalidShapeError("shape collections cannot be nested")
        return ShapeCollection(self, shapes=members)

    def distance(self, a: Point, b: Point) -> float:
        return self.calculator.distance(a, b)

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def read_shape(self, text: str) -> Shape:
        """
        Parse shape text.

        Raises:
            ShapeParseError: Malformed text.
            UnsupportedOperationError: Well-known text for shapes this
                package does not model, like polygons.
        """
        text = text.strip()
        if not text:
            raise ShapeParseError("empty shape text", text=text)

        if text[0].isalpha():
            if text.startswith(CIRCLE_PREFIX):
                return self._read_circle(text)
            keyword = text.split("(", 1)[0].strip().upper()
            if keyword in UNSUPPORTED_KEYWORDS:
                raise UnsupportedOperationError(f"{keyword} shapes are not supported")
            raise ShapeParseError("unknown shape", text=text)

        if "," in text:
            return self.read_lat_lon_point(text)

        tokens = text.split()
        if len(tokens) == 2:
            return self._point_from_text(_parse_number(tokens[0], text), _parse_number(tokens[1], text), text)
        if len(tokens) == 4:
            min_x, min_y, max_x, max_y = (_parse_number(token, text) for token in tokens)
            try:
                return self.make_rect(min_x, max_x, min_y, max_y)
            except InvalidShapeError as err:
                raise ShapeParseError(err.message, text=text) from err
        raise ShapeParseError(f"expected 2 or 4 numbers, found {len(tokens)}", text=text)

    def read_lat_lon_point(self, text: str) -> Point:
        """Parse ``"<lat>,<lon>"`` into a point with x=lon, y=lat."""
        parts = text.split(",")
        if len(parts) != 2:
            raise ShapeParseError("expected '<lat>,<lon>'", text=text)
        lat = _parse_number(parts[0].strip(), text)
        lon = _parse_number(parts[1].strip(), text)
        if not -90.0 <= lat <= 90.0:
            raise ShapeParseError(f"latitude {lat} is outside [-90, 90]", text=text)
        if not -180.0 <= lon <= 180.0:
            raise ShapeParseError(f"longitude {lon} is outside [-180, 180]", text=text)
        return self._point_from_text(lon, lat, text)

    def _point_from_text(self, x: float, y: float, text: str) -> Point:
        try:
            return self.make_point(x, y)
        except InvalidShapeError as err:
            raise ShapeParseError(err.message, text=text) from err

    def _read_circle(self, text: str) -> Circle:
        end = text.rfind(")")
        if end == -1:
            raise ShapeParseError("missing ')'", text=text)
        if text[end + 1 :].strip():
            raise ShapeParseError("unexpected text after ')'", text=text)

        tokens = text[len(CIRCLE_PREFIX) : end].split()
        if not tokens:
            raise ShapeParseError("missing circle center", text=text)

        if "," in tokens[0]:
            center = self.read_lat_lon_point(tokens[0])
            rest = tokens[1:]
        else:
            if len(tokens) < 2:
                raise ShapeParseError("missing circle center y", text=text)
            center = self._point_from_text(
                _parse_number(tokens[0], text), _parse_number(tokens[1], text), text
            )
            rest = tokens[2:]

        if not rest:
            raise ShapeParseError("missing distance", text=text)
        if len(rest) > 1:
            raise ShapeParseError(f"extra arguments: {' '.join(rest[1:])}", text=text)

        key, sep, value = rest[0].partition("=")
        if sep:
            if key not in DISTANCE_KEYS:
                raise ShapeParseError(f"unknown argument: {key}", text=text)
        else:
            value = key
        distance = _parse_number(value, text)
        try:
            return self.make_circle(center, distance)
        except InvalidShapeError as err:
            raise ShapeParseError(err.message, text=text) from err

    def write_rect(self, rect: Rectangle) -> str:
        """Canonical rectangle text: minX minY maxX maxY with fixed precision."""
        return " ".join(
            _format_number(value) for value in (rect.min_x, rect.min_y, rect.max_x, rect.max_y)
        )

    def write_shape(self, shape: Shape) -> str:
        """Write a shape in the text grammar ``read_shape`` accepts."""
        match shape:
            case Point():
                return f"{_format_number(shape.x)} {_format_number(shape.y)}"
            case Rectangle():
                return self.write_rect(shape)
            case Circle():
                return (
                    f"{CIRCLE_PREFIX}{_format_number(shape.center.x)} "
                    f"{_format_number(shape.center.y)} d={_format_number(shape.radius)})"
                )
            case ShapeCollection():
                raise UnsupportedOperationError("shape collections have no text form")
            case _:
                assert_never(shape)


def new_context(
    unit: DistanceUnit | None = DistanceUnit.KILOMETERS,
    calculator: DistanceCalculator | None = None,
    world_bounds: Rectangle | tuple[float, float, float, float] | None = None,
    *,
    allow_multi_overlap: bool = False,
) -> SpatialContext:
    """
    Build a spatial context.

    Args:
        unit: Distance unit
        calculator: Optional calculator overriding the unit's default
        world_bounds: Optional world extent, as a Rectangle or as
            (min_x, max_x, min_y, max_y)
        allow_multi_overlap: Whether collection members may overlap

    Raises:
        ConfigurationError: Invalid combination
    """
    if isinstance(world_bounds, tuple):
        min_x, max_x, min_y, max_y = world_bounds
        try:
            world_bounds = Rectangle(
                min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, geo=unit is None or unit.is_geo
            )
        except InvalidShapeError as err:
            raise ConfigurationError(f"invalid world bounds: {err.message}") from err
    return SpatialContext(
        unit=unit,
        calculator=calculator,
        world_bounds=world_bounds,
        allow_multi_overlap=allow_multi_overlap,
    )
