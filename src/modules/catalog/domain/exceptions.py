"""Catalog domain exceptions."""

from enum import Enum

from fastapi import status

from src.core.domain.exceptions import DomainException


class FailureKind(str, Enum):
    """抓取失败类型。"""

    NETWORK = "network"  # 请求未能完成（含非 2xx 状态）
    DECODE = "decode"  # 响应结构不符合预期


class CatalogFetchError(DomainException):
    """Base error for remote catalog fetches."""

    http_status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "CATALOG_FETCH_FAILED"
    kind: FailureKind = FailureKind.NETWORK


class NetworkFailure(CatalogFetchError):
    """Raised when a request to a remote service cannot complete."""

    error_code = "CATALOG_NETWORK_FAILURE"
    kind = FailureKind.NETWORK


class DecodeFailure(CatalogFetchError):
    """Raised when a remote payload is not in the expected shape."""

    error_code = "CATALOG_DECODE_FAILURE"
    kind = FailureKind.DECODE
