"""FastAPI dependency injection: catalog service."""

from __future__ import annotations

from catalogo.services import get_catalog_service
from catalogo.services.catalog_service import CatalogService


def get_catalog() -> CatalogService:
    """Catalog service singleton; overridden in tests."""
    return get_catalog_service()
