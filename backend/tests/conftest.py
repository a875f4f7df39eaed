"""Test fixtures: on-disk image trees and FastAPI test client."""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalogo.api.deps import get_catalog
from catalogo.main import create_app
from catalogo.services.catalog_service import CatalogService


def make_tree(root: Path, files: list[str], dirs: list[str] = ()) -> Path:
    """Create empty ``files`` and ``dirs`` (relative, "/"-separated) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for d in dirs:
        (root / d).mkdir(parents=True, exist_ok=True)
    for f in files:
        path = root / f
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x89PNG")
    return root


@pytest.fixture
def image_root(tmp_path):
    """A/1.jpg, A/B/2.png and an empty C/."""
    return make_tree(tmp_path / "images", ["A/1.jpg", "A/B/2.png"], dirs=["C"])


@pytest.fixture
def catalog(image_root):
    return CatalogService(images_root=str(image_root), url_prefix="/images")


@pytest.fixture
def app(catalog: CatalogService):
    """FastAPI app with the catalog dependency overridden."""
    app = create_app()
    app.dependency_overrides[get_catalog] = lambda: catalog
    return app


@pytest_asyncio.fixture
async def client(app):
    """Provide an async test client for ``app``."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def build_tree(tmp_path):
    """Factory for custom trees under a fresh image root."""
    def _build(files: list[str], dirs: list[str] = ()) -> Path:
        return make_tree(tmp_path / "tree", files, dirs)
    return _build
