"""Mini README: Storage gateway for product records.

Exports the gateway, its factory and the record types so the interface and
CLI never touch SQLAlchemy directly.
"""

from .gateway import ProductGateway, build_engine, create_gateway
from .records import ProductRecord, ProductStatistics

__all__ = [
    "ProductGateway",
    "ProductRecord",
    "ProductStatistics",
    "build_engine",
    "create_gateway",
]
