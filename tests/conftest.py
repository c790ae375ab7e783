"""Pytest configuration and fixtures for spatial shapes tests."""

import importlib

import pytest
from fastapi.testclient import TestClient

from spatial_shapes.context import new_context
from spatial_shapes.models import DistanceUnit

# Planar world used by the euclidean fixtures
PLANAR_WORLD = (-100.0, 100.0, -50.0, 50.0)

SETTINGS_ENV = (
    "SPATIAL_UNIT",
    "SPATIAL_WORLD_BOUNDS",
    "SPATIAL_ALLOW_MULTI_OVERLAP",
    "SPATIAL_LOG_LEVEL",
)


@pytest.fixture
def geo_ctx():
    """Geographic context in kilometers."""
    return new_context(DistanceUnit.KILOMETERS)


@pytest.fixture
def planar_ctx():
    """Euclidean context over a bounded world."""
    return new_context(DistanceUnit.EUCLIDEAN, world_bounds=PLANAR_WORLD)


@pytest.fixture
def overlap_ctx():
    """Euclidean context whose collections may hold overlapping members."""
    return new_context(DistanceUnit.EUCLIDEAN, world_bounds=PLANAR_WORLD, allow_multi_overlap=True)


def _load_app(monkeypatch, **env):
    """Reload settings and the app so they pick up the given environment."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)

    import spatial_shapes.config

    importlib.reload(spatial_shapes.config)

    import spatial_shapes.main

    importlib.reload(spatial_shapes.main)
    return spatial_shapes.main.app


@pytest.fixture(scope="function")
def client(monkeypatch):
    """Test client for a server with the default geographic context."""
    app = _load_app(monkeypatch)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def planar_client(monkeypatch):
    """Test client for a server with a planar context."""
    app = _load_app(
        monkeypatch,
        SPATIAL_UNIT="euclidean",
        SPATIAL_WORLD_BOUNDS="-100 -50 100 50",
    )
    with TestClient(app) as test_client:
        yield test_client
