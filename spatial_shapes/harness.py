"""
Randomized relation harness.

Generates a target rectangle and a candidate shape, relates them in both
directions and checks that the answers agree with each other, with the
shapes' bounding boxes and with points sampled inside the shapes.

Every run is driven by one seed; a failure reports it so the run can be
replayed exactly (see ``scripts/relate_fuzz.py``).
"""

from __future__ import annotations

import logging
import math
import random
from collections import Counter
from collections.abc import Callable
from typing import NoReturn, assert_never

from spatial_shapes.context import SpatialContext
from spatial_shapes.exceptions import ConfigurationError
from spatial_shapes.geo import Circle, Point, Rectangle, Shape, ShapeCollection
from spatial_shapes.models import SpatialRelation

logger = logging.getLogger(__name__)

CONTAINS = SpatialRelation.CONTAINS
WITHIN = SpatialRelation.WITHIN
DISJOINT = SpatialRelation.DISJOINT

# Fraction of the radius used when sampling inside a circle
CIRCLE_SAMPLE_RATIO = 0.9

ShapeGenerator = Callable[["RelationHarness", Point], Shape]


class RelationCheckError(AssertionError):
    """A relation invariant did not hold for a generated pair of shapes."""

    def __init__(self, message: str, *, seed: int, trial: int, shape: Shape, rect: Rectangle):
        self.seed = seed
        self.trial = trial
        self.shape = shape
        self.rect = rect
        super().__init__(f"{message} (seed={seed}, trial={trial}, shape={shape!r}, rect={rect!r})")


class RelationHarness:
    """
    Randomized checker for ``relate()``.

    Args:
        ctx: Context shapes are built with. Its world must be finite.
        generate_shape: Called with the harness and a reference point;
            returns the candidate shape for one trial.
        seed: Seed for the random generator; picked at random if omitted.
    """

    def __init__(
        self,
        ctx: SpatialContext,
        generate_shape: ShapeGenerator,
        *,
        seed: int | None = None,
    ):
        world = ctx.world_bounds
        if not (math.isfinite(world.width) and math.isfinite(world.height)):
            raise ConfigurationError("the relation harness needs a context with a finite world")
        self.ctx = ctx
        self.generate_shape = generate_shape
        self.seed = seed if seed is not None else random.randrange(2**32)
        self.random = random.Random(self.seed)
        self.trial = 0

    # -------------------------------------------------------------------------
    # Generators
    # -------------------------------------------------------------------------

    def _divisible(self, high: float) -> float:
        """Random value in [0, high], half the time a multiple of 10 so edges coincide."""
        value = self.random.uniform(0, high)
        if self.random.random() < 0.5:
            value = math.floor(value / 10) * 10
        return value

    def _clamp(self, value: float, low: float, high: float) -> float:
        return max(low, min(high, value))

    def random_point(self, near: Point | None = None) -> Point:
        """A point anywhere in the world, or within a tenth of the world of ``near``."""
        world = self.ctx.world_bounds
        if near is None:
            x = world.min_x + self._divisible(world.width)
            y = world.min_y + self._divisible(world.height)
        else:
            x = near.x + self.random.uniform(-1, 1) * world.width / 10
            y = near.y + self.random.uniform(-1, 1) * world.height / 10
        if not self.ctx.is_geo:
            x = self._clamp(x, world.min_x, world.max_x)
        y = self._clamp(y, world.min_y, world.max_y)
        return self.ctx.make_point(x, y)

    def random_rectangle(self, near: Point | None = None) -> Rectangle:
        """
        A rectangle with random extent.

        With ``near`` the rectangle is at most half the world wide and
        covers that point. Geographic rectangles may cross the dateline.
        """
        world = self.ctx.world_bounds
        scale = 0.5 if near is not None else 1.0
        if near is None:
            near = self.random_point()
        width = self._divisible(world.width * scale)
        height = self._divisible(world.height * scale)

        min_x = near.x - self.random.uniform(0, width)
        max_x = min_x + width
        min_y = self._clamp(near.y - self.random.uniform(0, height), world.min_y, world.max_y)
        max_y = self._clamp(min_y + height, world.min_y, world.max_y)
        if not self.ctx.is_geo:
            min_x = self._clamp(min_x, world.min_x, world.max_x)
            max_x = self._clamp(max_x, world.min_x, world.max_x)
        return self.ctx.make_rect(min_x, max_x, min_y, max_y)

    def random_circle(self, near: Point | None = None) -> Circle:
        """A circle centered near ``near`` reaching up to a quarter of the world."""
        world = self.ctx.world_bounds
        center = self.random_point(near)
        degrees = self._divisible(world.height / 2)
        return self.ctx.make_circle(center, self.ctx.calculator.degrees_to_distance(degrees))

    def random_point_in(self, shape: Shape) -> Point:
        """A point inside ``shape``."""
        match shape:
            case Point():
                return shape
            case Rectangle():
                x = shape.min_x + self.random.random() * shape.width
                y = shape.min_y + self.random.random() * shape.height
                return self.ctx.make_point(x, y)
            case Circle():
                distance = shape.radius * CIRCLE_SAMPLE_RATIO * self.random.random()
                bearing = self.random.uniform(0, 360)
                x, y = shape.calculator.point_on_bearing(
                    shape.center.x, shape.center.y, distance, bearing
                )
                return self.ctx.make_point(x, y)
            case ShapeCollection():
                return self.random_point_in(shape.shapes[0])
            case _:
                assert_never(shape)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def _fail(self, message: str, shape: Shape, rect: Rectangle) -> NoReturn:
        error = RelationCheckError(message, seed=self.seed, trial=self.trial, shape=shape, rect=rect)
        logger.error(f"Relation check failed: {error}")
        raise error

    def check(self, shape: Shape, rect: Rectangle) -> SpatialRelation:
        """
        Relate ``shape`` to ``rect`` and verify the answer.

        Returns:
            The relation of ``shape`` to ``rect``

        Raises:
            RelationCheckError: If an invariant does not hold
        """
        relation = shape.relate(rect)
        inverse = rect.relate(shape)

        if inverse is not relation.transpose():
            bbox = shape.bounding_box
            same_extent = rect.relate(bbox) is CONTAINS and bbox.relate(rect) is CONTAINS
            if not (relation is CONTAINS and inverse is CONTAINS and same_extent):
                self._fail(
                    f"{relation.value} one way but {inverse.value} the other way", shape, rect
                )

        bbox_relation = shape.bounding_box.relate(rect)
        if bbox_relation is DISJOINT and relation is not DISJOINT:
            self._fail(f"bounding boxes are disjoint but relation is {relation.value}", shape, rect)
        if isinstance(shape, Rectangle) and relation is DISJOINT and bbox_relation is not DISJOINT:
            self._fail(f"disjoint rectangle but bounding box is {bbox_relation.value}", shape, rect)

        if relation is DISJOINT:
            point = self.random_point_in(shape)
            if rect.relate(point) is not DISJOINT:
                self._fail(f"disjoint, yet {point!r} of the shape is in the rectangle", shape, rect)
        elif relation is WITHIN:
            point = self.random_point_in(shape)
            if rect.relate(point) is not CONTAINS:
                self._fail(f"within, yet {point!r} of the shape is outside the rectangle", shape, rect)
        elif relation is CONTAINS:
            point = self.random_point_in(rect)
            if shape.relate(point) is not CONTAINS:
                self._fail(f"contains, yet {point!r} of the rectangle is outside the shape", shape, rect)
        return relation

    def run_trial(self) -> SpatialRelation:
        rect = self.random_rectangle()
        if self.random.random() < 0.5:
            reference = self.random_point_in(rect)
        else:
            reference = self.random_point()
        shape = self.generate_shape(self, reference)
        return self.check(shape, rect)

    def run(self, trials: int = 100) -> Counter[SpatialRelation]:
        """
        Run ``trials`` trials.

        Returns:
            How often each relation was seen
        """
        counts: Counter[SpatialRelation] = Counter()
        for trial in range(trials):
            self.trial = trial
            counts[self.run_trial()] += 1
        summary = ", ".join(f"{relation.value}={count}" for relation, count in sorted(counts.items()))
        logger.info(f"Relation harness seed={self.seed}: {trials} trials ({summary})")
        return counts


# -----------------------------------------------------------------------------
# Standard shape generators
# -----------------------------------------------------------------------------


def generate_rectangle(harness: RelationHarness, near: Point) -> Rectangle:
    return harness.random_rectangle(near)


def generate_circle(harness: RelationHarness, near: Point) -> Circle:
    return harness.random_circle(near)


def generate_point(harness: RelationHarness, near: Point) -> Point:
    return harness.random_point(near)


def generate_collection(harness: RelationHarness, near: Point) -> ShapeCollection:
    """One to four rectangles; the first two near ``near``, the rest anywhere."""
    count = harness.random.randint(1, 4)
    return harness.ctx.make_collection(
        harness.random_rectangle(near if i < 2 else None) for i in range(count)
    )


GENERATORS: dict[str, ShapeGenerator] = {
    "rectangle": generate_rectangle,
    "circle": generate_circle,
    "point": generate_point,
    "collection": generate_collection,
}
