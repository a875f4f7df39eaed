"""API route registration."""

from fastapi import APIRouter

from catalogo.api.routes import catalog, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(catalog.router, tags=["catalog"])
