"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    # 本地开发使用人类可读格式，其他环境输出 JSON
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/catalog_explorer_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


def get_business_logger() -> structlog.BoundLogger:
    """获取业务事件日志记录器。

    Usage:
        from src.core.infrastructure.logging import get_business_logger

        log = get_business_logger()
        log.info("catalog_view_committed", lineage="limit", entries=20)
    """
    return structlog.get_logger("business")


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.catalog_fetch_failed(lineage="limit", failure="network", error="...")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def log_event(
        cls,
        event_name: str,
        event_data: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """记录通用业务事件。"""
        cls._log.info(event_name, **(event_data or {}), **extra)

    @classmethod
    def log_error(
        cls,
        error: Exception | str,
        context: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """记录错误事件。"""
        cls._log.error(
            "error",
            error_type=type(error).__name__ if isinstance(error, Exception) else None,
            error=str(error),
            **(context or {}),
            **extra,
        )

    @classmethod
    def log_warning(
        cls,
        message: str,
        context: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """记录警告事件。"""
        cls._log.warning(message, **(context or {}), **extra)

    @classmethod
    def catalog_fetch_started(
        cls,
        lineage: str,
        token: int,
        **extra: Any,
    ) -> None:
        """记录目录抓取开始事件。"""
        cls._log.info(
            "catalog_fetch_started",
            event_type="fetch",
            lineage=lineage,
            token=token,
            **extra,
        )

    @classmethod
    def catalog_fetch_failed(
        cls,
        lineage: str,
        failure: str,
        error: str | None,
        **extra: Any,
    ) -> None:
        """记录目录抓取失败事件。"""
        cls._log.warning(
            "catalog_fetch_failed",
            event_type="fetch_error",
            lineage=lineage,
            failure=failure,
            error=error,
            **extra,
        )

    @classmethod
    def catalog_fetch_superseded(
        cls,
        lineage: str,
        token: int,
        current_token: int,
        **extra: Any,
    ) -> None:
        """记录过期响应被丢弃事件。"""
        cls._log.info(
            "catalog_fetch_superseded",
            event_type="fetch",
            lineage=lineage,
            token=token,
            current_token=current_token,
            **extra,
        )

    @classmethod
    def catalog_view_committed(
        cls,
        lineage: str,
        entry_count: int,
        **extra: Any,
    ) -> None:
        """记录视图提交事件。"""
        cls._log.info(
            "catalog_view_committed",
            event_type="commit",
            lineage=lineage,
            entry_count=entry_count,
            **extra,
        )

    @classmethod
    def categories_loaded(
        cls,
        category_count: int,
        **extra: Any,
    ) -> None:
        """记录分类列表加载事件。"""
        cls._log.info(
            "categories_loaded",
            event_type="categories",
            category_count=category_count,
            **extra,
        )
