"""catalogExplorer - 可分页、可按分类过滤的目录浏览服务入口。"""

from collections.abc import AsyncIterator

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.catalog.application import dependencies as catalog_app_deps
from src.modules.catalog.infrastructure import dependencies as catalog_infra_deps
from src.modules.catalog.infrastructure.gateways import create_http_client


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting catalogExplorer...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    client = create_http_client()
    orchestrator = catalog_infra_deps.build_catalog_orchestrator(client)
    app.state.catalog_orchestrator = orchestrator
    await orchestrator.start()

    yield

    logger.info("Shutting down catalogExplorer...")
    await orchestrator.aclose()
    await client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="目录浏览服务 - 分页加载与按分类过滤",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[catalog_app_deps.get_catalog_orchestrator] = (
    catalog_infra_deps.get_catalog_orchestrator
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    远程服务不可用时不会报错，只反映当前视图状态。
    """
    orchestrator = getattr(app.state, "catalog_orchestrator", None)
    if orchestrator is None:
        return {"status": "starting", "environment": settings.ENVIRONMENT}

    snapshot = orchestrator.snapshot()
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "version": "0.1.0",
        "view": {
            "mode": snapshot.mode,
            "limit": snapshot.limit,
            "is_loading": snapshot.is_loading,
            "visible_entries": len(snapshot.visible_entries),
            "categories": len(orchestrator.category_catalog.categories),
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to catalogExplorer API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
