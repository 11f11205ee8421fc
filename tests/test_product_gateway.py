"""Mini README: Tests for the SQLAlchemy product gateway.

These run against a temporary SQLite file and a pinned clock. They check
that derived metrics are frozen at insert time, listing order, the
forgiving delete, zero-valued statistics on an empty table, and that
driver failures surface as ``StorageError``.
"""

from __future__ import annotations

from datetime import date

import pytest

from dailycost.errors import StorageError
from dailycost.storage import create_gateway


def test_init_schema_is_idempotent(gateway) -> None:
    """Creating the schema repeatedly is harmless."""

    gateway.init_schema()
    gateway.init_schema()
    assert gateway.list_products() == []


def test_empty_statistics_are_zero(gateway) -> None:
    """An empty table yields zeroes, never nulls."""

    stats = gateway.get_statistics()
    assert stats.as_dict() == {
        "total_products": 0,
        "total_price": 0,
        "total_daily_cost": 0,
        "avg_daily_cost": 0,
    }
    assert isinstance(stats.total_price, float)


def test_insert_computes_and_returns_derived_fields(gateway) -> None:
    """Inserting returns the stored row with id, metrics and timestamp."""

    record = gateway.insert_product("Laptop", 1200, "2024-01-01")

    assert record.id > 0
    assert record.name == "Laptop"
    assert record.price == pytest.approx(1200.0)
    assert record.purchase_date == date(2024, 1, 1)
    assert record.days_from_today == 300
    assert record.daily_cost == pytest.approx(4.0)
    assert record.created_at is not None


def test_purchase_dated_today_at_midnight_costs_nothing(gateway, clock) -> None:
    """No elapsed time means a daily cost of zero."""

    clock.now = clock.now.replace(hour=0, minute=0)
    record = gateway.insert_product("Coffee", 4.5, clock.now.date())
    assert record.days_from_today == 0
    assert record.daily_cost == 0


def test_derived_fields_are_frozen_after_insert(gateway, clock) -> None:
    """Listed metrics reflect insertion time, not query time."""

    created = gateway.insert_product("Headphones", 300, "2024-10-01")
    clock.advance(days=45)

    listed = gateway.list_products()

    assert len(listed) == 1
    assert listed[0] == created
    assert listed[0].days_from_today == 26
    assert listed[0].daily_cost == pytest.approx(300 / 26)


def test_list_products_returns_newest_first(gateway) -> None:
    """Rows created in the same second still list newest first."""

    first = gateway.insert_product("Desk", 250, "2024-05-01")
    second = gateway.insert_product("Chair", 150, "2024-06-01")

    names = [record.name for record in gateway.list_products()]

    assert second.id > first.id
    assert names == ["Chair", "Desk"]


def test_delete_missing_product_is_not_an_error(gateway) -> None:
    """Deleting an unknown id reports nothing removed."""

    gateway.insert_product("Phone", 800, "2024-02-01")

    assert gateway.delete_product(9999) is False
    assert len(gateway.list_products()) == 1


def test_delete_removes_existing_product(gateway) -> None:
    record = gateway.insert_product("Phone", 800, "2024-02-01")

    assert gateway.delete_product(record.id) is True
    assert gateway.list_products() == []


def test_statistics_aggregate_all_rows(gateway) -> None:
    """Totals and averages include future-dated purchases."""

    gateway.insert_product("Laptop", 1200, "2024-01-01")  # 300 days -> 4.0
    gateway.insert_product("Bike", 600, "2024-07-19")  # 100 days -> 6.0
    gateway.insert_product("Preorder", 50, "2024-12-01")  # future -> 0.0

    stats = gateway.get_statistics()

    assert stats.total_products == 3
    assert stats.total_price == pytest.approx(1850.0)
    assert stats.total_daily_cost == pytest.approx(10.0)
    assert stats.avg_daily_cost == pytest.approx(10.0 / 3)


def test_missing_table_raises_storage_error(settings) -> None:
    """Driver failures are wrapped with their original message."""

    gateway = create_gateway(settings)
    try:
        with pytest.raises(StorageError) as excinfo:
            gateway.list_products()
    finally:
        gateway.dispose()
    assert "no such table" in excinfo.value.message
    assert excinfo.value.status_code == 500


def test_describe_backend_reports_sqlite(gateway) -> None:
    assert gateway.describe_backend() == "sqlite"


@pytest.mark.parametrize("product_id", [2**63, -(2**63) - 1, 10**20])
def test_delete_out_of_range_id_is_a_no_op(gateway, product_id: int) -> None:
    """Ids the database cannot represent are treated as missing."""

    gateway.insert_product("Phone", 800, "2024-02-01")

    assert gateway.delete_product(product_id) is False
    assert len(gateway.list_products()) == 1
