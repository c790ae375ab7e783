"""
Spatial shapes server.

Parses shape text and relates shapes over HTTP.
"""

import argparse
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spatial_shapes import __version__
from spatial_shapes.api import api_router
from spatial_shapes.config import settings
from spatial_shapes.context import SpatialContext
from spatial_shapes.models import DistanceUnit

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("spatial_shapes")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the spatial context once; every request shares it.
    """
    logger.info(f"Starting spatial shapes server v{__version__}")
    ctx = SpatialContext.from_settings(settings)
    app.state.spatial_context = ctx
    world = ctx.world_bounds
    logger.info(
        f"Spatial context: unit={ctx.unit.value} "
        f"world=({world.min_x}, {world.min_y}, {world.max_x}, {world.max_y}) "
        f"allow_multi_overlap={ctx.allow_multi_overlap}"
    )

    yield

    logger.info("Shutting down spatial shapes server")


# Create the FastAPI application
app = FastAPI(
    title="Spatial Shapes",
    description="Points, rectangles and circles with dateline-aware spatial relations",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with basic server info."""
    return {
        "name": "Spatial Shapes",
        "version": __version__,
        "unit": settings.unit.value,
        "docs": "/docs",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def run():
    """Run the server using uvicorn."""
    parser = argparse.ArgumentParser(description="Spatial shapes server")
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=None,
        help=f"Port to listen on (default: {settings.port}, or SPATIAL_PORT env var)"
    )
    parser.add_argument(
        "-H", "--host",
        type=str,
        default=None,
        help=f"Host to bind to (default: {settings.host}, or SPATIAL_HOST env var)"
    )
    parser.add_argument(
        "-u", "--unit",
        choices=[unit.value for unit in DistanceUnit],
        default=None,
        help=f"Distance unit of the spatial context (default: {settings.unit.value}, or SPATIAL_UNIT env var)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    args = parser.parse_args()

    # Command line args override config/env vars
    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port
    if args.unit is not None:
        # the app is imported by uvicorn, so the unit travels through the environment
        os.environ["SPATIAL_UNIT"] = args.unit

    uvicorn.run(
        "spatial_shapes.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


if __name__ == "__main__":
    run()
