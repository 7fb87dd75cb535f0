"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，远程服务全部用可控的假网关替代）

使用方法：
    # 运行所有测试
    uv run pytest

    # 运行带覆盖率
    uv run pytest --cov=src --cov-report=html
"""

import asyncio
from collections import defaultdict
from collections.abc import Callable
from typing import Any

import pytest

from src.core.config import Settings
from src.core.domain.ports.business_logger import BusinessEventLogger
from src.modules.catalog.application.orchestrator import CatalogViewOrchestrator
from src.modules.catalog.application.view_state import ViewSnapshot
from src.modules.catalog.domain.entities import Category, Entry
from src.modules.catalog.domain.exceptions import FailureKind
from src.modules.catalog.domain.fetcher import FetchResult

# ============================================
# 辅助函数
# ============================================


def make_entries(*names: str) -> list[Entry]:
    return [Entry(name=name, url=f"https://example.com/entry/{name}/") for name in names]


def numbered_entries(count: int, prefix: str = "p") -> list[Entry]:
    return make_entries(*(f"{prefix}{index}" for index in range(1, count + 1)))


def entry_names(snapshot: ViewSnapshot) -> list[str]:
    return [entry.name for entry in snapshot.visible_entries]


async def drain_event_loop(iterations: int = 10) -> None:
    """让已就绪的 task 跑完（不等待仍被挂起的请求）。"""
    for _ in range(iterations):
        await asyncio.sleep(0)


# ============================================
# 假网关与事件记录器
# ============================================


class ScriptedGateway:
    """可控的目录 / 分类网关。

    auto=True 时请求立即完成；auto=False 时每个请求都挂起，
    直到测试调用 release()，从而可以按任意顺序完成响应。
    """

    def __init__(self, *, auto: bool = True) -> None:
        self.auto = auto
        self.catalog: list[Entry] = []
        self.categories: list[Category] = []
        self.members: dict[str, list[Entry]] = {}
        self.failures: dict[tuple[str, Any], FailureKind] = {}
        self.calls: list[tuple[str, Any]] = []
        self._pending: dict[tuple[str, Any], list[asyncio.Future[None]]] = (
            defaultdict(list)
        )

    async def list_entries(self, limit: int) -> FetchResult[list[Entry]]:
        return await self._respond(("limit", limit), lambda: self.catalog[:limit])

    async def list_categories(self) -> FetchResult[list[Category]]:
        return await self._respond(("categories", None), lambda: list(self.categories))

    async def list_entries_by_category(
        self, category: str
    ) -> FetchResult[list[Entry]]:
        return await self._respond(
            ("category", category), lambda: list(self.members.get(category, []))
        )

    def pending(self, kind: str, arg: Any = None) -> int:
        return len(self._pending[(kind, arg)])

    async def release(self, kind: str, arg: Any = None) -> None:
        """Complete the oldest outstanding request for (kind, arg)."""
        await drain_event_loop()
        waiters = self._pending[(kind, arg)]
        assert waiters, f"no outstanding request for {(kind, arg)}"
        waiters.pop(0).set_result(None)
        await drain_event_loop()

    async def _respond(self, key: tuple[str, Any], produce: Callable[[], Any]):
        self.calls.append(key)
        if not self.auto:
            waiter = asyncio.get_running_loop().create_future()
            self._pending[key].append(waiter)
            await waiter

        failure = self.failures.get(key)
        if failure is not None:
            return FetchResult.failed(failure, f"{failure.value} failure for {key}")
        return FetchResult.success(produce(), metadata={"key": key})


class RecordingEventLogger(BusinessEventLogger):
    """记录所有业务事件的假 logger。"""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def log_event(
        self,
        event_name: str,
        event_data: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self.events.append((event_name, {**(event_data or {}), **kwargs}))

    async def log_error(
        self,
        error: Exception | str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self.events.append(("error", {"error": str(error), **(context or {})}))

    async def log_warning(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self.events.append(("warning", {"message": message, **(context or {})}))

    def named(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]


# ============================================
# Fixtures
# ============================================


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        CATALOG_SERVICE_URL="https://catalog.example.com/api/catalog",
        CATEGORY_SERVICE_URL="https://catalog.example.com/api/categories",
        CATALOG_INITIAL_LIMIT=20,
        CATALOG_LIMIT_STEP=20,
    )


@pytest.fixture
def event_logger() -> RecordingEventLogger:
    return RecordingEventLogger()


@pytest.fixture
def gateway() -> ScriptedGateway:
    """请求挂起直到手动释放的网关。"""
    scripted = ScriptedGateway(auto=False)
    scripted.catalog = numbered_entries(100)
    scripted.categories = [Category(name=name) for name in ("normal", "fire", "water")]
    scripted.members = {
        "fire": make_entries("p4", "p5", "p6"),
        "water": make_entries("p3", "p9"),
    }
    return scripted


@pytest.fixture
def auto_gateway(gateway: ScriptedGateway) -> ScriptedGateway:
    gateway.auto = True
    return gateway


@pytest.fixture
async def orchestrator(gateway: ScriptedGateway, event_logger: RecordingEventLogger):
    view = CatalogViewOrchestrator(
        catalog_gateway=gateway,
        category_gateway=gateway,
        event_logger=event_logger,
        initial_limit=20,
        limit_step=20,
        placeholder_label="Select a type",
    )
    yield view
    await view.aclose()
