"""Health check."""

from fastapi import APIRouter, Depends

from catalogo import __version__
from catalogo.api.deps import get_catalog
from catalogo.schemas.system import HealthResponse
from catalogo.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(catalog: CatalogService = Depends(get_catalog)):
    """Lightweight check, also reports whether the image root is present."""
    return HealthResponse(version=__version__, images_root_present=catalog.root_exists())


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
