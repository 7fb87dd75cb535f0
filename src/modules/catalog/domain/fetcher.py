"""Fetcher domain interfaces and models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from src.modules.catalog.domain.entities import Category, Entry
from src.modules.catalog.domain.exceptions import CatalogFetchError, FailureKind

T = TypeVar("T")


class FetchStatus(str, Enum):
    """抓取状态枚举。"""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """抓取结果封装。

    网关不向外抛出异常，而是返回成功值或带失败类型的结果，
    由编排层决定如何处理失败。
    """

    status: FetchStatus
    value: T | None = None
    failure: FailureKind | None = None
    error_message: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @classmethod
    def success(
        cls,
        value: T,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult[T]":
        return cls(
            status=FetchStatus.SUCCESS,
            value=value,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def failed(
        cls,
        failure: FailureKind,
        error_message: str,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult[T]":
        return cls(
            status=FetchStatus.FAILED,
            failure=failure,
            error_message=error_message,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def from_error(
        cls,
        error: CatalogFetchError,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult[T]":
        return cls.failed(
            error.kind,
            error.message,
            duration_ms=duration_ms,
            metadata=metadata,
        )


class CatalogGateway(Protocol):
    """Port for the remote catalog listing service."""

    async def list_entries(self, limit: int) -> FetchResult[list[Entry]]: ...


class CategoryGateway(Protocol):
    """Port for the remote category service."""

    async def list_categories(self) -> FetchResult[list[Category]]: ...

    async def list_entries_by_category(
        self, category: str
    ) -> FetchResult[list[Entry]]: ...
