"""Thin client for the Sanity HTTP API (GROQ query and mutate endpoints).

Only the two calls the service needs are wrapped.  Any non-2xx response
or transport failure is raised as ``SanityApiError`` carrying the HTTP
status (None for transport failures) and the decoded error payload.
"""

from __future__ import annotations

from typing import Any

import httpx

from pexpress.infrastructure.config import SanityConfig


class SanityApiError(Exception):

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


class SanityClient:

    def __init__(
        self,
        config: SanityConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._dataset = config.dataset
        self._http = httpx.Client(
            base_url=config.base_url,
            headers={"Authorization": f"Bearer {config.token}"},
            timeout=config.timeout,
            transport=transport,
        )

    def query(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query and return its ``result``."""
        body = self._post(
            f"/query/{self._dataset}",
            {"query": query, "params": params or {}},
            fallback="Failed to query product",
        )
        return body.get("result")

    def mutate(self, mutations: list[dict[str, Any]]) -> dict:
        """Submit mutations; the store applies them as one transaction."""
        return self._post(
            f"/mutate/{self._dataset}",
            {"mutations": mutations},
            fallback="Failed to update stock",
        )

    def close(self) -> None:
        self._http.close()

    # --- Internal helpers -----------------------------------------------------

    def _post(self, path: str, body: dict, fallback: str) -> dict:
        try:
            response = self._http.post(path, json=body)
        except httpx.HTTPError as exc:
            raise SanityApiError(f"{fallback}: {exc}") from exc

        payload = _decode(response)
        if response.is_error:
            raise SanityApiError(
                _error_message(payload, fallback),
                status_code=response.status_code,
                payload=payload,
            )
        return payload


def _decode(response: httpx.Response) -> dict:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _error_message(payload: dict, fallback: str) -> str:
    error = payload.get("error")
    if isinstance(error, dict):
        message = error.get("description") or error.get("message")
        if message:
            return str(message)
    if payload.get("message"):
        return str(payload["message"])
    if isinstance(error, str) and error:
        return error
    return fallback
