"""Shared HTTP plumbing for the remote catalog services.

所有网关共享同一个 httpx.AsyncClient；这里把传输层异常和 JSON 解码异常
统一映射为 NetworkFailure / DecodeFailure，具体网关只负责解析载荷结构。
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from loguru import logger

from src.core.config import settings
from src.modules.catalog.domain.entities import Entry
from src.modules.catalog.domain.exceptions import DecodeFailure, NetworkFailure


def create_http_client(timeout_sec: float | None = None) -> httpx.AsyncClient:
    """Create the shared client used by every gateway."""
    return httpx.AsyncClient(
        timeout=timeout_sec if timeout_sec is not None else settings.FETCHER_TIMEOUT_SEC,
        follow_redirects=True,
        headers={
            "User-Agent": settings.FETCHER_USER_AGENT,
            "Accept": "application/json",
        },
    )


class HttpGateway:
    """Base class for JSON-over-HTTP gateways."""

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(f"GET {url} returned HTTP {exc.response.status_code}")
            raise NetworkFailure(f"HTTP {exc.response.status_code}") from exc
        except httpx.TimeoutException as exc:
            logger.warning(f"GET {url} timed out: {exc}")
            raise NetworkFailure(f"Timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"GET {url} failed: {exc}")
            raise NetworkFailure(f"Error: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeFailure(f"Invalid JSON from {url}: {exc}") from exc

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    @staticmethod
    def _require_list(payload: Any, key: str) -> list[Any]:
        if not isinstance(payload, dict):
            raise DecodeFailure("Response payload must be a JSON object")
        value = payload.get(key)
        if not isinstance(value, list):
            raise DecodeFailure(f"Response payload missing '{key}' list")
        return value

    @staticmethod
    def _text(value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        text = value.strip()
        return text or None

    @classmethod
    def _parse_entry(cls, record: Any) -> Entry | None:
        if not isinstance(record, dict):
            return None
        name = cls._text(record.get("name"))
        if name is None:
            return None
        return Entry(name=name, url=cls._text(record.get("url")) or "")
