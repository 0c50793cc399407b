"""HTTP client for the ERP admin REST surface."""
from __future__ import annotations

from typing import Any

import httpx

from backend.core.errors import ApiError, NetworkError, NotFound

DOMAIN_PATHS: dict[str, str] = {
    "ledgers": "/api/finance/ledgers",
    "accounts": "/api/finance/accounts",
    "employees": "/api/hrm/employees",
    "projects": "/api/pms/projects",
    "tasks": "/api/pms/tasks",
    "tenants": "/api/tenants",
    "users": "/api/users",
    "code_groups": "/api/system/code-groups",
    "codes": "/api/system/codes",
}


class ErpApiClient:
    """Thin wrapper around :class:`httpx.Client` for the record endpoints.

    Transport failures surface as :class:`NetworkError`, a 404 as
    :class:`NotFound` and every other non-success status as :class:`ApiError`.
    No retries are attempted.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        token: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._client.headers.update(headers)
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _path(domain: str) -> str:
        try:
            return DOMAIN_PATHS[domain]
        except KeyError as exc:
            raise ValueError(f"unknown domain {domain!r}") from exc

    def _request(self, method: str, url: str, *, record_id: str | None = None, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc
        if response.status_code == 404:
            entity = response.text.removesuffix(" not found") or "Record"
            raise NotFound(entity, record_id or url)
        if response.is_error:
            raise ApiError(response.status_code, response.text)
        return response

    # ------------------------------------------------------------------
    # record operations
    # ------------------------------------------------------------------
    def list(self, domain: str, **filters: str) -> list[dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        return self._request("GET", self._path(domain), params=params).json()

    def get(self, domain: str, record_id: str) -> dict[str, Any]:
        return self._request("GET", f"{self._path(domain)}/{record_id}", record_id=record_id).json()

    def create(self, domain: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", self._path(domain), json=payload).json()

    def update(self, domain: str, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"{self._path(domain)}/{record_id}", record_id=record_id, json=payload).json()

    def delete(self, domain: str, record_id: str) -> None:
        self._request("DELETE", f"{self._path(domain)}/{record_id}", record_id=record_id)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ErpApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
