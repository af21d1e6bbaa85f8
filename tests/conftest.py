"""Shared pytest fixtures for Placecage tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from placecage.api.main import app, get_pipeline
from placecage.core.cache_paths import CachePaths
from placecage.core.catalog import supported_entries
from placecage.core.config import PlacecageConfig
from placecage.core.pipeline import ImagePipeline

SOURCE_SIZE = (64, 48)


def source_color(index: int) -> tuple[int, int, int]:
    """Solid colour used for catalog photo ``index`` in generated fixtures.

    Each index gets a distinct colour so tests can tell which source photo
    the pipeline picked by sampling the output.
    """
    return ((index * 37) % 256, (index * 91) % 256, (index * 53) % 256)


def assert_color_close(actual, expected, tolerance: int = 12) -> None:
    """Compare an RGB pixel allowing for JPEG compression drift."""
    for a, e in zip(actual[:3], expected):
        assert abs(a - e) <= tolerance, f"{actual} != {expected}"


def write_source_image(path: Path, index: int, size: tuple[int, int] = SOURCE_SIZE) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, source_color(index)).save(path, format="JPEG", quality=95)
    return path


@pytest.fixture(name="source_color")
def source_color_fixture():
    """Expose :func:`source_color` to tests."""
    return source_color


@pytest.fixture(name="assert_color_close")
def assert_color_close_fixture():
    """Expose :func:`assert_color_close` to tests."""
    return assert_color_close


@pytest.fixture(name="write_source_image")
def write_source_image_fixture():
    """Expose :func:`write_source_image` to tests."""
    return write_source_image


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> PlacecageConfig:
    """Create a test configuration rooted in a temporary images directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        PlacecageConfig instance for testing
    """
    return PlacecageConfig(
        images_dir=str(temp_dir / "images"),
        jpeg_quality=90,
        _env_file=None,
    )


@pytest.fixture
def source_catalog(test_config: PlacecageConfig) -> CachePaths:
    """Populate ``images/source`` with one solid-colour JPEG per catalog photo.

    Returns:
        CachePaths rooted at the test images directory
    """
    paths = CachePaths(test_config.images_dir)
    for entry in supported_entries():
        for index in range(1, entry.count + 1):
            write_source_image(paths.source_path(entry.subject, entry.kind, index), index)
    return paths


@pytest.fixture
def pipeline(test_config: PlacecageConfig, source_catalog: CachePaths) -> ImagePipeline:
    """Pipeline backed by the populated test catalog."""
    return ImagePipeline(test_config)


@pytest.fixture
def test_client(pipeline: ImagePipeline) -> Generator[TestClient, None, None]:
    """FastAPI TestClient whose routes use the test pipeline.

    The client is not entered as a context manager, so the application
    lifespan (which builds a pipeline from the global config) does not run.
    """
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
