"""Shared pytest fixtures for Visions gallery tests."""

import os

# Keep the import-time global config away from the working directory.
os.environ.setdefault("VISIONS_DATABASE_PATH", ":memory:")

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from visions_gallery.api.main import create_app
from visions_gallery.core.config import GalleryConfig
from visions_gallery.core.image_store import ImageStore
from visions_gallery.ui.models import GalleryViewState


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
def test_config(temp_dir: Path) -> GalleryConfig:
    """Create a test configuration with a temporary database path.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        GalleryConfig instance for testing
    """
    return GalleryConfig(
        _env_file=None,
        database_path=temp_dir / "data" / "gallery.db",
        api_base_url="http://testserver",
    )


@pytest.fixture
def memory_store() -> Generator[ImageStore, None, None]:
    """Isolated in-memory image store."""
    store = ImageStore(":memory:")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def file_store(temp_dir: Path) -> ImageStore:
    """Image store backed by a file in the temporary directory."""
    return ImageStore(temp_dir / "gallery.db")


@pytest.fixture
def test_client(memory_store: ImageStore, test_config: GalleryConfig):
    """FastAPI TestClient serving an in-memory store."""
    app = create_app(store=memory_store, settings=test_config)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def strict_client(memory_store: ImageStore, test_config: GalleryConfig):
    """TestClient with strict not-found reporting enabled."""
    settings = test_config.model_copy(update={"strict_not_found": True})
    app = create_app(store=memory_store, settings=settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def view_state() -> GalleryViewState:
    """Create empty gallery view state for testing."""
    return GalleryViewState()


@pytest.fixture
def sample_payload() -> dict:
    """A complete create/update request body."""
    return {
        "url": "https://x/y.png",
        "title": "T",
        "description": "D",
    }
