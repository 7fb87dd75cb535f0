"""Category service gateway.

- `GET {CATEGORY_SERVICE_URL}` → `{results: [{name}]}`
- `GET {CATEGORY_SERVICE_URL}/{name}` → `{pokemon: [{pokemon: {name, url}}]}`

分类成员记录是嵌套结构，这里展平为 Entry。
"""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import quote

from loguru import logger

from src.modules.catalog.domain.entities import Category, Entry
from src.modules.catalog.domain.exceptions import CatalogFetchError
from src.modules.catalog.domain.fetcher import FetchResult
from src.modules.catalog.infrastructure.gateways.base import HttpGateway


class HttpCategoryGateway(HttpGateway):
    """Fetch the category list and per-category membership."""

    MEMBERSHIP_KEY = "pokemon"

    async def list_categories(self) -> FetchResult[list[Category]]:
        start_time = time.time()
        metadata = {"url": self.base_url}
        try:
            payload = await self._get_json(self.base_url)
            categories = self._parse_categories(payload)
        except CatalogFetchError as exc:
            return FetchResult.from_error(
                exc, duration_ms=self._elapsed_ms(start_time), metadata=metadata
            )

        return FetchResult.success(
            categories,
            duration_ms=self._elapsed_ms(start_time),
            metadata=metadata,
        )

    async def list_entries_by_category(
        self, category: str
    ) -> FetchResult[list[Entry]]:
        start_time = time.time()
        url = f"{self.base_url}/{quote(category, safe='')}"
        metadata = {"category": category, "url": url}
        try:
            payload = await self._get_json(url)
            entries = self._project_members(payload)
        except CatalogFetchError as exc:
            return FetchResult.from_error(
                exc, duration_ms=self._elapsed_ms(start_time), metadata=metadata
            )

        logger.debug(f"Category '{category}' returned {len(entries)} entries")
        return FetchResult.success(
            entries,
            duration_ms=self._elapsed_ms(start_time),
            metadata=metadata,
        )

    @classmethod
    def _parse_categories(cls, payload: Any) -> list[Category]:
        categories: list[Category] = []
        for record in cls._require_list(payload, "results"):
            if not isinstance(record, dict):
                continue
            name = cls._text(record.get("name"))
            if name is not None:
                categories.append(Category(name=name))
        return categories

    @classmethod
    def _project_members(cls, payload: Any) -> list[Entry]:
        entries: list[Entry] = []
        for membership in cls._require_list(payload, cls.MEMBERSHIP_KEY):
            if not isinstance(membership, dict):
                continue
            entry = cls._parse_entry(membership.get(cls.MEMBERSHIP_KEY))
            if entry is not None:
                entries.append(entry)
        return entries
