"""Mini README: Value types returned by the product gateway.

Structure:
    * ProductRecord - one stored purchase with its frozen derived metrics.
    * ProductStatistics - totals and averages across every stored purchase.

Both types normalise numbers on construction from database rows so SQLite
and PostgreSQL results serialise identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..metrics import parse_purchase_date


@dataclass(slots=True, frozen=True)
class ProductRecord:
    """A tracked purchase as stored in the ``products`` table."""

    id: int
    name: str
    price: float
    purchase_date: date
    days_from_today: int
    daily_cost: float
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductRecord":
        """Build a record from a result mapping, coercing driver types."""

        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            id=int(row["id"]),
            name=str(row["name"]),
            price=float(row["price"]),
            purchase_date=parse_purchase_date(row["purchase_date"]),
            days_from_today=int(row["days_from_today"]),
            daily_cost=float(row["daily_cost"]),
            created_at=created_at,
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the record with JSON-friendly values."""

        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "purchase_date": self.purchase_date.isoformat(),
            "days_from_today": self.days_from_today,
            "daily_cost": self.daily_cost,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(slots=True, frozen=True)
class ProductStatistics:
    """Aggregate figures; every value is zero when nothing is stored."""

    total_products: int = 0
    total_price: float = 0.0
    total_daily_cost: float = 0.0
    avg_daily_cost: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductStatistics":
        """Build statistics from an aggregate row, mapping ``NULL`` to zero."""

        return cls(
            total_products=int(row["total_products"] or 0),
            total_price=float(row["total_price"] or 0),
            total_daily_cost=float(row["total_daily_cost"] or 0),
            avg_daily_cost=float(row["avg_daily_cost"] or 0),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_products": self.total_products,
            "total_price": self.total_price,
            "total_daily_cost": self.total_daily_cost,
            "avg_daily_cost": self.avg_daily_cost,
        }
