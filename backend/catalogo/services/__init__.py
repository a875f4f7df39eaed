"""Business logic services: singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogo.config import settings

if TYPE_CHECKING:
    from catalogo.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

_catalog_service: CatalogService | None = None


def init_services() -> None:
    """Create and wire up all service singletons."""
    global _catalog_service

    from catalogo.services.catalog_service import CatalogService

    _catalog_service = CatalogService(
        images_root=settings.images_dir,
        url_prefix=settings.images_url_prefix,
        sort_entries=settings.sort_entries,
    )
    if _catalog_service.root_exists():
        logger.info("Catalog serving images from %s", _catalog_service.images_root)
    else:
        logger.warning(
            "Image root %s does not exist (CATALOGO_IMAGES_DIR), "
            "catalog will be empty",
            _catalog_service.images_root,
        )


def shutdown_services() -> None:
    global _catalog_service
    _catalog_service = None


def get_catalog_service() -> CatalogService:
    if _catalog_service is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _catalog_service
