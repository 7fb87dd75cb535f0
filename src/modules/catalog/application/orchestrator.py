"""Catalog view orchestrator.

编排器是 ViewState 的唯一写入者：
- 用户意图（选择分类 / 加载更多）修改编排输入
- 每次输入变化恰好触发一个 feed 抓取
- 响应到达时先做新鲜度检查（谱系 token），通过后才提交到 ViewState

所有抓取都在同一个事件循环上以 task 运行；完成处理在最后一个 await 之后
同步完成检查与提交，因此提交过程中不会被其他处理交错。被取代的请求不会在
网络层取消，只是其结果被丢弃。
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import ValidationError
from src.core.domain.ports.business_logger import BusinessEventLogger
from src.modules.catalog.application.feeds import (
    CategoryCatalog,
    CategoryFilteredFeed,
    LimitedEntryFeed,
)
from src.modules.catalog.application.lineage import FetchLineage, FetchTicket
from src.modules.catalog.application.view_state import ViewSnapshot, ViewState
from src.modules.catalog.domain.entities import NO_CATEGORY, Entry
from src.modules.catalog.domain.fetcher import (
    CatalogGateway,
    CategoryGateway,
    FetchResult,
)


class CatalogViewOrchestrator:
    """Decide which remote query is authoritative for the visible catalog."""

    def __init__(
        self,
        catalog_gateway: CatalogGateway,
        category_gateway: CategoryGateway,
        event_logger: BusinessEventLogger,
        *,
        initial_limit: int | None = None,
        limit_step: int | None = None,
        placeholder_label: str | None = None,
    ) -> None:
        if initial_limit is None:
            initial_limit = settings.CATALOG_INITIAL_LIMIT
        if limit_step is None:
            limit_step = settings.CATALOG_LIMIT_STEP
        if initial_limit < 1 or limit_step < 1:
            raise ValidationError("Catalog limit and limit step must be positive")

        self.event_logger = event_logger
        self.limit_step = limit_step
        self.category_catalog = CategoryCatalog(
            category_gateway,
            event_logger,
            placeholder_label or settings.CATEGORY_PLACEHOLDER_LABEL,
        )
        self.limited_feed = LimitedEntryFeed(catalog_gateway)
        self.category_feed = CategoryFilteredFeed(category_gateway)

        self.view = ViewState()
        self.limit_lineage = FetchLineage(self.limited_feed.lineage)
        self.category_lineage = FetchLineage(self.category_feed.lineage)

        self._limit = initial_limit
        self._selected_category = NO_CATEGORY
        self._tasks: set[asyncio.Task[Any]] = set()
        self._started = False

    # ------------------------------------------------------------------
    # 只读状态
    # ------------------------------------------------------------------

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def selected_category(self) -> str:
        return self._selected_category

    @property
    def is_loading(self) -> bool:
        return self.limit_lineage.in_flight or self.category_lineage.in_flight

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            visible_entries=self.view.visible_entries,
            is_loading=self.is_loading,
            categories=self.category_catalog.options,
            selected_category=self._selected_category,
            limit=self._limit,
            committed_by=self.view.committed_by,
        )

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load categories and fire the initial limit fetch (once)."""
        if self._started:
            return
        self._started = True
        logger.info(f"Starting catalog view (limit={self._limit})")
        self._spawn(self.category_catalog.load())
        self._begin_limit_fetch()

    async def wait_until_settled(self) -> None:
        """Wait for every outstanding fetch task, including superseded ones."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._tasks.clear()

    # ------------------------------------------------------------------
    # 用户意图
    # ------------------------------------------------------------------

    def increase_limit(self) -> int:
        """Widen the window by one step and refetch the whole first-N range."""
        self._limit += self.limit_step
        self._begin_limit_fetch()
        return self._limit

    def select_category(self, name: str | None) -> bool:
        """Change the category filter; returns True when a fetch was issued.

        清空筛选不会触发重新抓取，当前可见条目保持不变；
        但仍在途的分类请求会被标记为已取代，避免 loading 卡住。
        """
        name = name or NO_CATEGORY
        if name == self._selected_category:
            return False

        self._selected_category = name
        if name == NO_CATEGORY:
            superseded = self.category_lineage.supersede()
            if superseded is not None:
                logger.debug(
                    f"Category filter cleared; dropping in-flight request for "
                    f"'{superseded.trigger}'"
                )
            return False

        self._begin_category_fetch(name)
        return True

    # ------------------------------------------------------------------
    # 抓取与提交
    # ------------------------------------------------------------------

    def _begin_limit_fetch(self) -> None:
        ticket = self.limit_lineage.begin(
            trigger=self._limit,
            authoritative=self._selected_category == NO_CATEGORY,
        )
        self._spawn(self._run_limit_fetch(ticket))

    def _begin_category_fetch(self, category: str) -> None:
        ticket = self.category_lineage.begin(trigger=category)
        self._spawn(self._run_category_fetch(ticket))

    async def _run_limit_fetch(self, ticket: FetchTicket) -> None:
        await self._report_started(ticket)
        result = await self.limited_feed.fetch(ticket.trigger)
        await self._complete(self.limit_lineage, ticket, result)

    async def _run_category_fetch(self, ticket: FetchTicket) -> None:
        await self._report_started(ticket)
        result = await self.category_feed.fetch(ticket.trigger)
        await self._complete(self.category_lineage, ticket, result)

    async def _complete(
        self,
        lineage: FetchLineage,
        ticket: FetchTicket,
        result: FetchResult[list[Entry]],
    ) -> None:
        # 新鲜度检查与提交必须同步完成，之后才允许 await 上报事件
        fresh = lineage.settle(ticket)
        committed: list[Entry] | None = None
        if fresh and result.is_success:
            if ticket.authoritative:
                committed = result.value or []
                self.view.commit(ticket.lineage, committed)
            else:
                logger.debug(
                    f"{ticket.lineage} result for {ticket.trigger!r} not committed: "
                    "another mode was active when it was requested"
                )

        if not result.is_success:
            await self._report(
                "catalog_fetch_failed",
                {
                    "lineage": ticket.lineage,
                    "failure": result.failure.value if result.failure else None,
                    "error": result.error_message,
                },
                token=ticket.token,
                trigger=ticket.trigger,
            )

        if not fresh:
            await self._report(
                "catalog_fetch_superseded",
                {
                    "lineage": ticket.lineage,
                    "token": ticket.token,
                    "current_token": lineage.token,
                },
            )
        elif committed is not None:
            await self._report(
                "catalog_view_committed",
                {"lineage": ticket.lineage, "entry_count": len(committed)},
                trigger=ticket.trigger,
                duration_ms=result.duration_ms,
            )

    async def _report_started(self, ticket: FetchTicket) -> None:
        await self._report(
            "catalog_fetch_started",
            {"lineage": ticket.lineage, "token": ticket.token},
            trigger=ticket.trigger,
        )

    async def _report(
        self,
        event_name: str,
        event_data: dict[str, Any],
        **kwargs: Any,
    ) -> None:
        try:
            await self.event_logger.log_event(event_name, event_data, **kwargs)
        except Exception as exc:
            logger.error(f"Failed to report {event_name}: {exc}")

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Catalog fetch task crashed: {exc}")
