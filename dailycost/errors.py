"""Mini README: Error types shared by the storage and HTTP layers.

Structure:
    * DailyCostError - base class carrying an HTTP status and JSON payload.
    * MissingFieldsError - a required product field was not supplied (400).
    * StorageError - the relational store rejected or failed an operation (500).

Every error serialises to ``{"error": message}`` so the front-end can show
the message without knowing which layer raised it.
"""

from __future__ import annotations

from typing import Dict

REQUIRED_FIELDS_MESSAGE = "please fill all required fields"


class DailyCostError(Exception):
    """Base exception translated into a JSON error response."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, str]:
        """Return the response body for this error."""

        return {"error": self.message}


class MissingFieldsError(DailyCostError):
    """Raised when name, price or purchase date is absent from a request."""

    status_code = 400

    def __init__(self, missing: tuple[str, ...] = ()) -> None:
        super().__init__(REQUIRED_FIELDS_MESSAGE)
        self.missing = missing


class StorageError(DailyCostError):
    """Raised when a database operation fails; carries the driver message."""

    status_code = 500
