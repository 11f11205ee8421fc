"""Mini README: Relational persistence for product records.

Structure:
    * products_table - SQLAlchemy Core definition of the ``products`` table.
    * ProductGateway - insert/list/delete/aggregate operations on that table.
    * create_gateway - build a gateway for SQLite or a remote database URL.

The gateway owns no global state: the application factory receives one
instance and tests construct their own over a temporary SQLite file. Derived
metrics are computed once, inside ``insert_product``, and stored alongside
the user's input. Any SQLAlchemy failure surfaces as ``StorageError`` with
the driver's message; nothing is retried.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    delete,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from ..configuration import DailyCostSettings, get_settings
from ..errors import StorageError
from ..logging_utils import get_logger
from ..metrics import daily_cost, days_since_purchase, parse_purchase_date
from ..metrics.calculator import DateLike
from .records import ProductRecord, ProductStatistics

LOGGER = get_logger(__name__)

# Ids are signed 64-bit integers on every backend; drivers refuse to bind wider values.
MIN_PRODUCT_ID = -(2**63)
MAX_PRODUCT_ID = 2**63 - 1

metadata = MetaData()

products_table = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", Float, nullable=False),
    Column("purchase_date", Date, nullable=False),
    Column("days_from_today", Integer, nullable=False),
    Column("daily_cost", Float, nullable=False),
    Column("created_at", DateTime, server_default=func.now()),
    sqlite_autoincrement=True,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _driver_message(error: SQLAlchemyError) -> str:
    """Prefer the DBAPI message over SQLAlchemy's statement-annotated one."""

    original = getattr(error, "orig", None)
    return str(original if original is not None else error)


class ProductGateway:
    """Persist products and compute their aggregates through one engine."""

    def __init__(
        self, engine: Engine, clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        self._engine = engine
        self._clock = clock or _utc_now

    def describe_backend(self) -> str:
        """Return the dialect name, e.g. ``sqlite`` or ``postgresql``."""

        return self._engine.dialect.name

    def init_schema(self) -> None:
        """Create the products table when it does not exist yet."""

        try:
            metadata.create_all(self._engine, checkfirst=True)
        except SQLAlchemyError as error:
            LOGGER.error("Schema initialisation failed: %s", error)
            raise StorageError(_driver_message(error)) from error
        LOGGER.info("Products schema ready on %s backend", self.describe_backend())

    def list_products(self) -> List[ProductRecord]:
        """Return every product, most recently created first."""

        query = select(products_table).order_by(
            products_table.c.created_at.desc(), products_table.c.id.desc()
        )
        try:
            with self._engine.connect() as connection:
                rows = connection.execute(query).mappings().all()
        except SQLAlchemyError as error:
            LOGGER.error("Listing products failed: %s", error)
            raise StorageError(_driver_message(error)) from error
        LOGGER.debug("Loaded %s products", len(rows))
        return [ProductRecord.from_row(row) for row in rows]

    def insert_product(
        self, name: str, price: float, purchase_date: DateLike
    ) -> ProductRecord:
        """Store a product with its derived metrics and return the saved row."""

        purchased_on = parse_purchase_date(purchase_date)
        days = days_since_purchase(purchased_on, now=self._clock())
        cost = daily_cost(price, days)
        statement = insert(products_table).values(
            name=name,
            price=float(price),
            purchase_date=purchased_on,
            days_from_today=days,
            daily_cost=cost,
        )
        try:
            with self._engine.begin() as connection:
                result = connection.execute(statement)
                product_id = result.inserted_primary_key[0]
                row = (
                    connection.execute(
                        select(products_table).where(products_table.c.id == product_id)
                    )
                    .mappings()
                    .one()
                )
        except SQLAlchemyError as error:
            LOGGER.error("Inserting product %r failed: %s", name, error)
            raise StorageError(_driver_message(error)) from error
        record = ProductRecord.from_row(row)
        LOGGER.info(
            "Added product %s (%s) days=%s daily_cost=%.4f",
            record.id,
            record.name,
            record.days_from_today,
            record.daily_cost,
        )
        return record

    def delete_product(self, product_id: int) -> bool:
        """Delete a product by id; a missing id is not an error."""

        if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
            LOGGER.debug("Delete requested for out-of-range product id %s", product_id)
            return False
        statement = delete(products_table).where(products_table.c.id == product_id)
        try:
            with self._engine.begin() as connection:
                removed = connection.execute(statement).rowcount
        except SQLAlchemyError as error:
            LOGGER.error("Deleting product %s failed: %s", product_id, error)
            raise StorageError(_driver_message(error)) from error
        if removed:
            LOGGER.info("Deleted product %s", product_id)
        else:
            LOGGER.debug("Delete requested for unknown product %s", product_id)
        return bool(removed)

    def get_statistics(self) -> ProductStatistics:
        """Return count, totals and the average daily cost."""

        query = select(
            func.count(products_table.c.id).label("total_products"),
            func.coalesce(func.sum(products_table.c.price), 0).label("total_price"),
            func.coalesce(func.sum(products_table.c.daily_cost), 0).label(
                "total_daily_cost"
            ),
            func.coalesce(func.avg(products_table.c.daily_cost), 0).label(
                "avg_daily_cost"
            ),
        )
        try:
            with self._engine.connect() as connection:
                row = connection.execute(query).mappings().one()
        except SQLAlchemyError as error:
            LOGGER.error("Computing statistics failed: %s", error)
            raise StorageError(_driver_message(error)) from error
        return ProductStatistics.from_row(row)

    def dispose(self) -> None:
        """Close pooled connections."""

        self._engine.dispose()


def build_engine(settings: DailyCostSettings) -> Engine:
    """Create an engine for the configured database URL or SQLite file."""

    if settings.database_url:
        url = make_url(settings.database_url)
        if url.drivername in {"postgres", "postgresql"}:
            url = url.set(drivername="postgresql+psycopg")
        if url.get_backend_name() == "sqlite":
            return create_engine(url, connect_args={"check_same_thread": False})
        return create_engine(url, pool_pre_ping=True)

    sqlite_path = settings.sqlite_path
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{sqlite_path}", connect_args={"check_same_thread": False}
    )


def create_gateway(
    settings: Optional[DailyCostSettings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ProductGateway:
    """Return a gateway wired to the configured storage backend."""

    settings = settings or get_settings()
    gateway = ProductGateway(build_engine(settings), clock=clock)
    LOGGER.debug("Created product gateway on %s backend", gateway.describe_backend())
    return gateway
