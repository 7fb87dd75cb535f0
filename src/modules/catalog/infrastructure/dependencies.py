"""Catalog module dependencies."""

import httpx
from fastapi import Request

from src.core.config import settings
from src.core.domain.ports.business_logger import BusinessEventLogger
from src.core.infrastructure.adapters.business_logger_adapter import (
    StructlogBusinessEventLogger,
)
from src.modules.catalog.application.orchestrator import CatalogViewOrchestrator
from src.modules.catalog.infrastructure.gateways import (
    HttpCatalogGateway,
    HttpCategoryGateway,
)


def get_business_event_logger() -> BusinessEventLogger:
    return StructlogBusinessEventLogger()


def build_catalog_orchestrator(client: httpx.AsyncClient) -> CatalogViewOrchestrator:
    """Wire gateways and the event logger into a fresh orchestrator."""
    return CatalogViewOrchestrator(
        catalog_gateway=HttpCatalogGateway(client, settings.CATALOG_SERVICE_URL),
        category_gateway=HttpCategoryGateway(client, settings.CATEGORY_SERVICE_URL),
        event_logger=get_business_event_logger(),
        initial_limit=settings.CATALOG_INITIAL_LIMIT,
        limit_step=settings.CATALOG_LIMIT_STEP,
        placeholder_label=settings.CATEGORY_PLACEHOLDER_LABEL,
    )


async def get_catalog_orchestrator(request: Request) -> CatalogViewOrchestrator:
    return request.app.state.catalog_orchestrator
