"""Catalog module application dependencies."""

from typing import NoReturn

from src.modules.catalog.application.orchestrator import CatalogViewOrchestrator


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_catalog_orchestrator() -> CatalogViewOrchestrator:
    _missing_dependency("CatalogViewOrchestrator")
