"""API router configuration."""

from fastapi import APIRouter

from src.modules.catalog.interfaces.router import router as catalog_router

api_router = APIRouter()

# Catalog view
api_router.include_router(catalog_router)
