"""Tests for shape collections."""

import pytest

from spatial_shapes.exceptions import InvalidShapeError
from spatial_shapes.geo import LongitudeRange, ShapeCollection, export_bounding_box
from spatial_shapes.models import SpatialRelation

CONTAINS = SpatialRelation.CONTAINS
WITHIN = SpatialRelation.WITHIN
INTERSECTS = SpatialRelation.INTERSECTS
DISJOINT = SpatialRelation.DISJOINT


class TestCollectionBoundingBox:
    """Tests for aggregate bounding boxes."""

    @pytest.mark.parametrize(
        "r1, r2",
        [
            ((-180, 180), (-180, 180)),
            ((-180, 180), (0, 180)),
            ((-180, 0), (0, 180)),
            ((-90, 90), (90, -90)),
        ],
    )
    def test_spans_covering_world(self, geo_ctx, r1, r2):
        """Spans that leave no gap aggregate to the whole world, in either order."""
        a = geo_ctx.make_rect(*r1, -10, 10)
        b = geo_ctx.make_rect(*r2, -10, 10)
        for shapes in ([a, b], [b, a]):
            bbox = geo_ctx.make_collection(shapes).bounding_box
            assert LongitudeRange.from_rect(bbox) == LongitudeRange(-180, 180)
            assert (bbox.min_y, bbox.max_y) == (-10, 10)

    def test_crossing_aggregate(self, geo_ctx):
        """Rectangles either side of the dateline aggregate across it."""
        east = geo_ctx.make_rect(170, 175, 0, 5)
        west = geo_ctx.make_rect(-175, -170, -5, 0)
        bbox = geo_ctx.make_collection([east, west]).bounding_box
        assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (170, -170, -5, 5)
        assert bbox.crosses_dateline
        exported = export_bounding_box(geo_ctx.make_collection([west, east]))
        assert exported.crosses_dateline
        assert (exported.min_x, exported.max_x) == (170, -170)

    def test_order_independent(self, geo_ctx):
        """Reordering members never changes the bounding box."""
        rects = [
            geo_ctx.make_rect(100, 120, 0, 1),
            geo_ctx.make_rect(-150, -140, 0, 1),
            geo_ctx.make_rect(170, -175, 0, 1),
            geo_ctx.make_rect(-20, 0, 0, 1),
        ]
        expected = geo_ctx.make_collection(rects).bounding_box
        assert geo_ctx.make_collection(reversed(rects)).bounding_box == expected
        assert geo_ctx.make_collection(rects[2:] + rects[:2]).bounding_box == expected

    def test_mixed_members(self, geo_ctx):
        """Points and circles contribute their own boxes."""
        calc = geo_ctx.calculator
        collection = geo_ctx.make_collection(
            [geo_ctx.make_point(-179, 3), geo_ctx.make_circle((170, 0), calc.degrees_to_distance(1))]
        )
        bbox = collection.bounding_box
        assert bbox.min_x == pytest.approx(169)
        assert bbox.max_x == -179
        assert bbox.min_y == pytest.approx(-1)
        assert bbox.max_y == 3

    def test_planar(self, planar_ctx):
        """Planar boxes aggregate by plain minimum and maximum."""
        collection = planar_ctx.make_collection(
            [planar_ctx.make_rect(0, 10, 0, 10), planar_ctx.make_rect(-20, -15, 5, 30)]
        )
        bbox = collection.bounding_box
        assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (-20, 10, 0, 30)
        assert not bbox.geo


class TestCollectionModel:
    """Tests for collection construction."""

    def test_empty(self, planar_ctx):
        """An empty collection is invalid."""
        with pytest.raises(InvalidShapeError):
            planar_ctx.make_collection([])

    def test_nested(self, planar_ctx):
        """Collections do not hold other collections."""
        inner = planar_ctx.make_collection([planar_ctx.make_point(1, 1)])
        with pytest.raises(InvalidShapeError):
            planar_ctx.make_collection([inner])

    def test_context(self, planar_ctx, overlap_ctx):
        """A collection remembers its context and its overlap policy."""
        point = planar_ctx.make_point(1, 1)
        collection = planar_ctx.make_collection([point])
        assert collection.context is planar_ctx
        assert collection.relate_contains_short_circuits
        assert not overlap_ctx.make_collection([point]).relate_contains_short_circuits

    def test_direct_construction(self, planar_ctx):
        """A collection can be built directly with its context."""
        collection = ShapeCollection(planar_ctx, shapes=[planar_ctx.make_point(1, 2)])
        assert collection.shapes == (planar_ctx.make_point(1, 2),)
        assert collection.type == "collection"


class TestCollectionRelations:
    """Tests for relating collections to other shapes."""

    @pytest.fixture
    def pair(self, planar_ctx):
        return planar_ctx.make_collection(
            [planar_ctx.make_rect(0, 10, 0, 10), planar_ctx.make_rect(20, 30, 0, 10)]
        )

    def test_member_contains(self, planar_ctx, pair):
        """One member containing the query is enough."""
        query = planar_ctx.make_rect(1, 2, 1, 2)
        assert pair.relate(query) is CONTAINS
        assert query.relate(pair) is WITHIN

    def test_gap_between_members(self, planar_ctx, pair):
        """A query in the gap between members is disjoint."""
        assert pair.relate(planar_ctx.make_rect(12, 18, 2, 3)) is DISJOINT

    def test_far_away(self, planar_ctx, pair):
        """A query outside the bounding box is disjoint."""
        assert pair.relate(planar_ctx.make_rect(50, 60, 0, 10)) is DISJOINT

    def test_within_query(self, planar_ctx, pair):
        """The whole collection may be within the query."""
        assert pair.relate(planar_ctx.make_rect(-5, 40, -5, 20)) is WITHIN

    def test_every_member_within(self, planar_ctx):
        """Every member within the query makes the collection within it."""
        collection = planar_ctx.make_collection(
            [planar_ctx.make_rect(0, 2, 0, 2), planar_ctx.make_rect(8, 10, 8, 10)]
        )
        query = planar_ctx.make_circle((5, 5), 8)
        assert collection.relate(query) is WITHIN
        assert query.relate(collection) is CONTAINS

    def test_straddling_members(self, planar_ctx, pair):
        """A query across both members intersects."""
        assert pair.relate(planar_ctx.make_rect(5, 25, 2, 3)) is INTERSECTS

    @pytest.mark.parametrize("overlap", [False, True])
    def test_single_member(self, planar_ctx, overlap_ctx, overlap):
        """A one-member collection relates like its member."""
        ctx = overlap_ctx if overlap else planar_ctx
        member = ctx.make_rect(0, 10, 0, 10)
        collection = ctx.make_collection([member])
        for query in (
            ctx.make_rect(1, 2, 1, 2),
            ctx.make_rect(5, 15, 5, 15),
            ctx.make_rect(-5, 20, -5, 20),
            ctx.make_rect(20, 30, 0, 10),
            ctx.make_point(3, 3),
        ):
            assert collection.relate(query) is member.relate(query)

    def test_point(self, planar_ctx, pair):
        """Points are contained by any member holding them."""
        assert pair.relate(planar_ctx.make_point(25, 5)) is CONTAINS
        assert pair.relate(planar_ctx.make_point(15, 5)) is DISJOINT


class TestOverlapPolicy:
    """Tests for collections whose members overlap."""

    def members(self, ctx):
        return [ctx.make_rect(0, 10, 0, 10), ctx.make_rect(2, 4, 2, 4)]

    def test_short_circuit(self, planar_ctx):
        """Without overlap, a containing member settles the answer."""
        collection = planar_ctx.make_collection(self.members(planar_ctx))
        assert collection.relate(planar_ctx.make_rect(1, 5, 1, 5)) is CONTAINS

    def test_overlap_folds_members(self, overlap_ctx):
        """With overlap every member counts."""
        collection = overlap_ctx.make_collection(self.members(overlap_ctx))
        assert collection.relate(overlap_ctx.make_rect(1, 5, 1, 5)) is INTERSECTS

    def test_overlap_order_independent(self, overlap_ctx):
        """Member order does not change the folded answer."""
        query = overlap_ctx.make_rect(1, 5, 1, 5)
        members = self.members(overlap_ctx)
        forward = overlap_ctx.make_collection(members).relate(query)
        backward = overlap_ctx.make_collection(reversed(members)).relate(query)
        assert forward is backward

    def test_overlap_contains_with_disjoint(self, overlap_ctx):
        """A containing member and a disjoint one still contain."""
        collection = overlap_ctx.make_collection(
            [overlap_ctx.make_rect(0, 10, 0, 10), overlap_ctx.make_rect(20, 30, 0, 10)]
        )
        assert collection.relate(overlap_ctx.make_rect(1, 2, 1, 2)) is CONTAINS

    def test_later_member_contains(self, planar_ctx, overlap_ctx):
        """A containing member after an intersecting one settles the answer only without overlap."""
        for ctx, expected in ((planar_ctx, CONTAINS), (overlap_ctx, INTERSECTS)):
            collection = ctx.make_collection(
                [ctx.make_rect(0, 10, 0, 10), ctx.make_rect(0, 30, 0, 10)]
            )
            assert collection.relate(ctx.make_rect(5, 25, 2, 3)) is expected

    def test_point_always_short_circuits(self, overlap_ctx):
        """A point inside any member is contained."""
        collection = overlap_ctx.make_collection(self.members(overlap_ctx))
        assert collection.relate(overlap_ctx.make_point(3, 3)) is CONTAINS
