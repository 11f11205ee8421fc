"""Mini README: Derived ownership metrics.

Pure helpers with no I/O, shared by the storage gateway and the CLI.
"""

from .calculator import daily_cost, days_since_purchase, parse_purchase_date

__all__ = ["daily_cost", "days_since_purchase", "parse_purchase_date"]
