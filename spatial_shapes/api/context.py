"""Spatial context discovery endpoint."""

from fastapi import APIRouter, Depends

from spatial_shapes.context import SpatialContext
from spatial_shapes.geo import export_bounding_box

from .schemas import ContextInfo
from .shapes import get_context

router = APIRouter()


@router.get("/context", response_model=ContextInfo)
async def context_info(ctx: SpatialContext = Depends(get_context)) -> ContextInfo:
    """Describe the unit, calculator and world of the server's spatial context."""
    return ContextInfo(
        unit=ctx.unit,
        geo=ctx.is_geo,
        calculator=ctx.calculator.type,
        world_bounds=export_bounding_box(ctx.world_bounds),
        allow_multi_overlap=ctx.allow_multi_overlap,
    )
