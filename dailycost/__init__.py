"""Mini README: Core package initializer for the daily cost tracker.

The tracker records purchases and spreads each price across the days it has
been owned. Subpackages split the pure arithmetic (``metrics``), the
relational gateway (``storage``) and the FastAPI service (``interface``).
"""

from .logging_utils import get_logger

__version__ = "1.0.0"

__all__ = ["__version__", "get_logger"]
