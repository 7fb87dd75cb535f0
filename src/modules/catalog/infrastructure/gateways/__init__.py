"""远程目录服务网关。"""

from src.modules.catalog.infrastructure.gateways.base import (
    HttpGateway,
    create_http_client,
)
from src.modules.catalog.infrastructure.gateways.catalog import HttpCatalogGateway
from src.modules.catalog.infrastructure.gateways.category import HttpCategoryGateway

__all__ = [
    "HttpGateway",
    "HttpCatalogGateway",
    "HttpCategoryGateway",
    "create_http_client",
]
