"""Shape parsing and relation endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from spatial_shapes.context import SpatialContext
from spatial_shapes.exceptions import InvalidShapeError, UnsupportedOperationError
from spatial_shapes.geo import Shape, export_bounding_box

from .schemas import ParseRequest, ParseResponse, RelateRequest, RelateResponse

router = APIRouter(prefix="/shapes")


def get_context(request: Request) -> SpatialContext:
    """The spatial context built at startup."""
    return request.app.state.spatial_context


def read_shape_or_raise(ctx: SpatialContext, text: str) -> Shape:
    """Parse shape text, turning shape errors into HTTP errors."""
    try:
        return ctx.read_shape(text)
    except UnsupportedOperationError as err:
        raise HTTPException(status_code=422, detail=err.to_error_dict()) from err
    except InvalidShapeError as err:
        raise HTTPException(status_code=400, detail=err.to_error_dict()) from err


@router.post("/parse", response_model=ParseResponse)
async def parse_shape(
    request: ParseRequest,
    ctx: SpatialContext = Depends(get_context),
) -> ParseResponse:
    """
    Parse shape text.

    Returns the normalized shape, its canonical text and the bounding box
    fields an index would store.
    """
    shape = read_shape_or_raise(ctx, request.text)
    return ParseResponse(
        shape=shape,
        text=ctx.write_shape(shape),
        bounding_box=export_bounding_box(shape),
    )


@router.post("/relate", response_model=RelateResponse)
async def relate_shapes(
    request: RelateRequest,
    ctx: SpatialContext = Depends(get_context),
) -> RelateResponse:
    """Relate one shape to another: contains, within, intersects or disjoint."""
    shape = read_shape_or_raise(ctx, request.shape)
    other = read_shape_or_raise(ctx, request.other)
    relation = shape.relate(other)
    return RelateResponse(
        relation=relation,
        intersects=relation.intersects,
        shape_bounding_box=export_bounding_box(shape),
        other_bounding_box=export_bounding_box(other),
    )
