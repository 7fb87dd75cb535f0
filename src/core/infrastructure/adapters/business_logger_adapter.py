"""Business event logger adapter implementation.

将 BusinessEventLogger 端口适配到 structlog 实现。
"""

from collections.abc import Callable
from typing import Any

from src.core.domain.ports.business_logger import BusinessEventLogger
from src.core.infrastructure.logging import BusinessEvents

_CATALOG_EVENTS: dict[str, Callable[..., None]] = {
    "catalog_fetch_started": BusinessEvents.catalog_fetch_started,
    "catalog_fetch_failed": BusinessEvents.catalog_fetch_failed,
    "catalog_fetch_superseded": BusinessEvents.catalog_fetch_superseded,
    "catalog_view_committed": BusinessEvents.catalog_view_committed,
    "categories_loaded": BusinessEvents.categories_loaded,
}


class StructlogBusinessEventLogger(BusinessEventLogger):
    """Adapter for structlog-based business event logging.

    虽然端口定义为 async 方法，但 structlog 日志记录是同步的，
    这里直接调用同步方法。
    """

    async def log_event(
        self,
        event_name: str,
        event_data: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Log a business event."""
        handler = _CATALOG_EVENTS.get(event_name)
        if handler is None:
            BusinessEvents.log_event(event_name, event_data, **kwargs)
            return
        handler(**(event_data or {}), **kwargs)

    async def log_error(
        self,
        error: Exception | str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Log an error with context."""
        BusinessEvents.log_error(error, context, **kwargs)

    async def log_warning(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Log a warning with context."""
        BusinessEvents.log_warning(message, context, **kwargs)
