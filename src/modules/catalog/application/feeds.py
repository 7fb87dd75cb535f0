"""Catalog feeds.

- CategoryCatalog: 启动时加载一次分类列表，失败则保持为空，不重试
- LimitedEntryFeed: 获取未过滤目录的前 N 个条目
- CategoryFilteredFeed: 获取某个分类下的全部条目
"""

from __future__ import annotations

from loguru import logger

from src.core.domain.ports.business_logger import BusinessEventLogger
from src.modules.catalog.domain.entities import Category, CategoryOption, Entry
from src.modules.catalog.domain.exceptions import CatalogFetchError, FailureKind
from src.modules.catalog.domain.fetcher import (
    CatalogGateway,
    CategoryGateway,
    FetchResult,
)


class LimitedEntryFeed:
    """First `limit` entries of the unfiltered catalog."""

    lineage = "limit"

    def __init__(self, gateway: CatalogGateway) -> None:
        self.gateway = gateway

    async def fetch(self, limit: int) -> FetchResult[list[Entry]]:
        try:
            return await self.gateway.list_entries(limit)
        except CatalogFetchError as exc:
            return FetchResult.from_error(exc, metadata={"limit": limit})
        except Exception as exc:
            logger.exception(f"Limit fetch error (limit={limit}): {exc}")
            return FetchResult.failed(
                FailureKind.NETWORK, str(exc), metadata={"limit": limit}
            )


class CategoryFilteredFeed:
    """All entries that belong to one category."""

    lineage = "category"

    def __init__(self, gateway: CategoryGateway) -> None:
        self.gateway = gateway

    async def fetch(self, category: str) -> FetchResult[list[Entry]]:
        try:
            return await self.gateway.list_entries_by_category(category)
        except CatalogFetchError as exc:
            return FetchResult.from_error(exc, metadata={"category": category})
        except Exception as exc:
            logger.exception(f"Category fetch error ({category}): {exc}")
            return FetchResult.failed(
                FailureKind.NETWORK, str(exc), metadata={"category": category}
            )


class CategoryCatalog:
    """Category list for the selector, loaded once per process."""

    lineage = "categories"

    def __init__(
        self,
        gateway: CategoryGateway,
        event_logger: BusinessEventLogger,
        placeholder_label: str,
    ) -> None:
        self.gateway = gateway
        self.event_logger = event_logger
        self.placeholder_label = placeholder_label
        self._categories: tuple[Category, ...] = ()
        self._load_requested = False

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def options(self) -> tuple[CategoryOption, ...]:
        """Selector rows; the "no filter" placeholder is always first."""
        return (
            CategoryOption.placeholder(self.placeholder_label),
            *(CategoryOption.from_category(category) for category in self._categories),
        )

    async def load(self) -> FetchResult[list[Category]] | None:
        """Fetch categories; later calls are no-ops."""
        if self._load_requested:
            return None
        self._load_requested = True

        try:
            result = await self.gateway.list_categories()
        except CatalogFetchError as exc:
            result = FetchResult.from_error(exc)
        except Exception as exc:
            logger.exception(f"Category list fetch error: {exc}")
            result = FetchResult.failed(FailureKind.NETWORK, str(exc))

        if not result.is_success:
            logger.warning(f"Failed to load categories: {result.error_message}")
            await self.event_logger.log_event(
                "catalog_fetch_failed",
                {
                    "lineage": self.lineage,
                    "failure": result.failure.value if result.failure else None,
                    "error": result.error_message,
                },
            )
            return result

        self._categories = tuple(result.value or ())
        await self.event_logger.log_event(
            "categories_loaded",
            {"category_count": len(self._categories)},
            duration_ms=result.duration_ms,
        )
        return result
