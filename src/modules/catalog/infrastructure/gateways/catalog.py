"""Catalog listing gateway (`GET {CATALOG_SERVICE_URL}?limit=n`)."""

from __future__ import annotations

import time
from typing import Any

from loguru import logger

from src.modules.catalog.domain.entities import Entry
from src.modules.catalog.domain.exceptions import CatalogFetchError
from src.modules.catalog.domain.fetcher import FetchResult
from src.modules.catalog.infrastructure.gateways.base import HttpGateway


class HttpCatalogGateway(HttpGateway):
    """Fetch the first N entries of the unfiltered catalog."""

    async def list_entries(self, limit: int) -> FetchResult[list[Entry]]:
        start_time = time.time()
        metadata = {"limit": limit, "url": self.base_url}
        try:
            payload = await self._get_json(self.base_url, params={"limit": limit})
            entries = self._parse_entries(payload)
        except CatalogFetchError as exc:
            return FetchResult.from_error(
                exc, duration_ms=self._elapsed_ms(start_time), metadata=metadata
            )

        logger.debug(f"Catalog listing returned {len(entries)} entries (limit={limit})")
        return FetchResult.success(
            entries,
            duration_ms=self._elapsed_ms(start_time),
            metadata=metadata,
        )

    @classmethod
    def _parse_entries(cls, payload: Any) -> list[Entry]:
        entries: list[Entry] = []
        for record in cls._require_list(payload, "results"):
            entry = cls._parse_entry(record)
            if entry is not None:
                entries.append(entry)
        return entries
