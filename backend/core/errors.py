"""Error taxonomy shared by the services, routes and the API client."""
from __future__ import annotations

from typing import Any


class NotFound(LookupError):
    """Raised when a record id is absent from its collection."""

    def __init__(self, entity: str, record_id: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id


class ValidationError(ValueError):
    """Raised when a request body or a mutation breaks a domain rule."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class NetworkError(RuntimeError):
    """Raised by the API client when the transport fails before a response arrives."""


class ApiError(RuntimeError):
    """Raised by the API client for any non-success response other than 404."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"request failed with status {status_code}")
        self.status_code = status_code
        self.body = body
