"""Catalog API routes."""

from fastapi import APIRouter, Depends, Query

from src.core.interfaces.http.response import ApiResponse
from src.modules.catalog.application.dependencies import get_catalog_orchestrator
from src.modules.catalog.application.orchestrator import CatalogViewOrchestrator
from src.modules.catalog.interfaces.schemas import (
    CategoryOptionResponse,
    SelectCategoryRequest,
    ViewSnapshotResponse,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


async def _respond(
    orchestrator: CatalogViewOrchestrator,
    wait: bool,
) -> ApiResponse[ViewSnapshotResponse]:
    if wait:
        await orchestrator.wait_until_settled()
    return ApiResponse.success(
        data=ViewSnapshotResponse.from_snapshot(orchestrator.snapshot())
    )


@router.get(
    "/view",
    response_model=ApiResponse[ViewSnapshotResponse],
    summary="获取目录视图",
    description="返回当前可见条目、loading 状态与分类选项",
)
async def get_view(
    wait: bool = Query(False, description="等待在途请求全部完成后再返回"),
    orchestrator: CatalogViewOrchestrator = Depends(get_catalog_orchestrator),
) -> ApiResponse[ViewSnapshotResponse]:
    """Get the current catalog snapshot."""
    return await _respond(orchestrator, wait)


@router.post(
    "/view/category",
    response_model=ApiResponse[ViewSnapshotResponse],
    summary="选择分类",
    description="选择分类触发按分类抓取；空字符串清除筛选但不会重新抓取",
)
async def select_category(
    request: SelectCategoryRequest,
    wait: bool = Query(False, description="等待在途请求全部完成后再返回"),
    orchestrator: CatalogViewOrchestrator = Depends(get_catalog_orchestrator),
) -> ApiResponse[ViewSnapshotResponse]:
    """Select a category filter."""
    orchestrator.select_category(request.name)
    return await _respond(orchestrator, wait)


@router.post(
    "/view/load-more",
    response_model=ApiResponse[ViewSnapshotResponse],
    summary="加载更多",
    description="条目上限增加一个步长，并重新抓取完整的前 N 个条目",
)
async def load_more(
    wait: bool = Query(False, description="等待在途请求全部完成后再返回"),
    orchestrator: CatalogViewOrchestrator = Depends(get_catalog_orchestrator),
) -> ApiResponse[ViewSnapshotResponse]:
    """Increase the page-size limit."""
    orchestrator.increase_limit()
    return await _respond(orchestrator, wait)


@router.get(
    "/categories",
    response_model=ApiResponse[list[CategoryOptionResponse]],
    summary="获取分类选项",
)
async def list_categories(
    orchestrator: CatalogViewOrchestrator = Depends(get_catalog_orchestrator),
) -> ApiResponse[list[CategoryOptionResponse]]:
    """List selector options, placeholder first."""
    return ApiResponse.success(
        data=[
            CategoryOptionResponse(label=option.label, value=option.value)
            for option in orchestrator.category_catalog.options
        ]
    )
