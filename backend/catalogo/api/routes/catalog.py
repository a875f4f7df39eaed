"""Catalog routes: home categories and per-path directory listings."""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request, status

from catalogo.api.deps import get_catalog
from catalogo.schemas.catalog import (
    Category,
    DirectoryPage,
    StaticParam,
    StaticParamsResponse,
)
from catalogo.services.catalog_service import CatalogService, parent_path

logger = logging.getLogger(__name__)

router = APIRouter()

_CATALOG_MARKER = "/catalog/"


def _raw_segments(request: Request, path: str) -> list[str]:
    """Path segments as sent by the client, still percent-encoded.

    Starlette decodes ``path`` already; the service expects to decode
    each segment itself, so read them back from the ASGI ``raw_path``.
    """
    raw = request.scope.get("raw_path")
    if raw:
        raw_path = raw.decode("latin-1").split("?", 1)[0]
        _, found, tail = raw_path.partition(_CATALOG_MARKER)
        if found:
            return [segment for segment in tail.split("/") if segment]
    return [quote(segment, safe="") for segment in path.split("/") if segment]


@router.get("/categories", response_model=list[Category])
async def list_categories(catalog: CatalogService = Depends(get_catalog)):
    """Top-level categories with recursive image counts and a preview."""
    return await catalog.list_categories()


@router.get("/categories/params", response_model=StaticParamsResponse)
async def static_params(catalog: CatalogService = Depends(get_catalog)):
    """Paths a static renderer should pre-generate."""
    params = await catalog.static_params()
    return StaticParamsResponse(params=[StaticParam(slug=slugs) for slugs in params])


@router.get("/catalog/{path:path}", response_model=DirectoryPage)
async def get_directory(
    path: str,
    request: Request,
    catalog: CatalogService = Depends(get_catalog),
):
    """Subcategories and images directly inside one catalog directory."""
    segments = _raw_segments(request, path)
    content = await catalog.resolve(segments)
    if content is None:
        logger.debug("Catalog path not found: %s", "/".join(segments))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )

    return DirectoryPage(
        name=content.name,
        subcategories=content.subcategories,
        images=content.images,
        path=segments,
        parent=parent_path(segments),
    )
