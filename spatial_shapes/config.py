"""
Configuration management for spatial shapes.

Uses pydantic-settings for environment variable loading with sensible defaults.
"""

from pydantic_settings import BaseSettings

from spatial_shapes.models import DistanceUnit


class Settings(BaseSettings):
    """Spatial context and server configuration."""

    # Spatial context
    unit: DistanceUnit = DistanceUnit.KILOMETERS
    world_bounds: str | None = None  # "minX minY maxX maxY", None = unit default
    allow_multi_overlap: bool = False

    # Server options
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "SPATIAL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
