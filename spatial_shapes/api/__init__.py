"""HTTP API endpoints for spatial shapes."""

from fastapi import APIRouter

from . import context, shapes

# Create a combined router for all API endpoints
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(shapes.router, tags=["shapes"])
api_router.include_router(context.router, tags=["context"])
