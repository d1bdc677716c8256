"""
HTTP client for the goal bingo API.

Thin wrapper over httpx: one method per endpoint, JSON envelopes unwrapped,
failures raised as ApiError / NetworkFailure.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

import httpx

from goalbingo.services.line_detection import Line

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"


class ApiError(Exception):
    """Non-success response from the API."""

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500 or self.code == "conflict"


class NetworkFailure(ApiError):
    """The request never produced a response. Safe to retry."""

    def __init__(self, cause: Exception | None = None) -> None:
        super().__init__("Network error. Please try again.")
        self.__cause__ = cause


class BingoApiClient:
    """
    Client for the goal bingo HTTP API.

    Pass ``http`` to reuse a configured ``httpx.Client`` (for example one with
    a WSGI transport in tests); otherwise a client is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        http: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("BINGO_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self._http = http or httpx.Client(timeout=timeout)
        self._owns_http = http is None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> BingoApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(method, url, json=json)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkFailure(exc) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success and isinstance(body, dict) and body.get("success", True):
            return body.get("data")

        error = (body.get("error") if isinstance(body, dict) else None) or {}
        raise ApiError(
            error.get("message") or f"HTTP {response.status_code}",
            status_code=response.status_code,
            code=error.get("code"),
        )

    def create_card(self, owner_name: str, goals: list[str], free_space_index: int) -> str:
        """Create a card and return its code."""
        data = self._request(
            "POST",
            "/cards",
            json={"ownerName": owner_name, "goals": goals, "freeSpaceIndex": free_space_index},
        )
        return str(data["code"])

    def get_card(self, code: str) -> dict[str, Any]:
        """Return ``{"card", "goals", "bingos"}`` for ``code``."""
        return self._request("GET", f"/cards/{code}")

    def update_card(self, code: str, **settings: Any) -> dict[str, Any]:
        """Update settings; keyword names are the API's camelCase keys."""
        return self._request("PUT", f"/cards/{code}", json=settings)

    def delete_card(self, code: str, owner_name: str) -> None:
        self._request("DELETE", f"/cards/{code}", json={"ownerName": owner_name})

    def update_goal(
        self,
        goal_id: int,
        *,
        text: str | None = None,
        is_completed: bool | None = None,
        completed_date: date | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if text is not None:
            payload["text"] = text
        if is_completed is not None:
            payload["isCompleted"] = is_completed
        if completed_date is not None:
            payload["completedDate"] = completed_date.isoformat()
        if notes is not None:
            payload["notes"] = notes
        return self._request("PUT", f"/goals/{goal_id}", json=payload)

    def add_bingo(self, code: str, line: Line) -> dict[str, Any]:
        return self._request(
            "POST",
            "/bingos",
            json={"cardCode": code, "type": line.type.value, "index": line.index},
        )

    def remove_bingo(self, code: str, line: Line) -> bool:
        data = self._request("DELETE", f"/bingos/{code}/{line.type.value}/{line.index}")
        return bool((data or {}).get("removed"))

    def reconcile(self, code: str) -> dict[str, Any]:
        """Ask the server to recheck every line of the card."""
        return self._request("POST", f"/cards/{code}/bingos/reconcile")
