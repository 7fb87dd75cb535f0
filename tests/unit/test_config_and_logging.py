"""配置校验与业务事件日志适配器测试。"""

import pydantic
import pytest
from structlog.testing import capture_logs

from src.core.config import Settings
from src.core.infrastructure.adapters.business_logger_adapter import (
    StructlogBusinessEventLogger,
)

pytestmark = pytest.mark.anyio


class TestSettings:
    """Settings 校验。"""

    def test_defaults(self, test_settings):
        assert test_settings.CATALOG_INITIAL_LIMIT == 20
        assert test_settings.CATALOG_LIMIT_STEP == 20
        assert test_settings.CATEGORY_PLACEHOLDER_LABEL == "Select a type"
        assert test_settings.FETCHER_TIMEOUT_SEC is None

    @pytest.mark.parametrize(
        "url",
        ["ftp://catalog.example.com/list", "catalog.example.com", "https://"],
    )
    def test_rejects_non_http_service_url(self, url):
        with pytest.raises(pydantic.ValidationError, match="HTTP"):
            Settings(CATALOG_SERVICE_URL=url)

    def test_rejects_non_positive_limit(self):
        with pytest.raises(pydantic.ValidationError, match="positive"):
            Settings(CATALOG_INITIAL_LIMIT=0)

    def test_rejects_non_positive_step(self):
        with pytest.raises(pydantic.ValidationError, match="positive"):
            Settings(CATALOG_LIMIT_STEP=-20)


async def test_adapter_routes_catalog_events_to_business_events() -> None:
    adapter = StructlogBusinessEventLogger()

    with capture_logs() as logs:
        await adapter.log_event(
            "catalog_fetch_failed",
            {"lineage": "limit", "failure": "network", "error": "HTTP 503"},
            token=3,
        )

    assert logs == [
        {
            "event": "catalog_fetch_failed",
            "event_type": "fetch_error",
            "lineage": "limit",
            "failure": "network",
            "error": "HTTP 503",
            "token": 3,
            "log_level": "warning",
        }
    ]


async def test_adapter_logs_unknown_events_generically() -> None:
    adapter = StructlogBusinessEventLogger()

    with capture_logs() as logs:
        await adapter.log_event("view_opened", {"client": "web"})
        await adapter.log_warning("slow response", {"lineage": "category"})

    assert logs[0] == {"event": "view_opened", "client": "web", "log_level": "info"}
    assert logs[1]["log_level"] == "warning"
    assert logs[1]["lineage"] == "category"
