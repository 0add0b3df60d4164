from __future__ import annotations

import time
from typing import Any

import requests  # type: ignore[import-untyped]

from ebtrigger_core.errors import (
    RemoteAuthError,
    RemoteNotFound,
    RemoteRequestError,
    RemoteTransportError,
)
from ebtrigger_core.logging import get_logger

DEFAULT_API_URL = "https://www.eventbriteapi.com/v3"
DEFAULT_TIMEOUT_S = 30.0
TRANSIENT_STATUSES: tuple[int, ...] = (429, 500, 502, 503, 504)

logger = get_logger(__name__)


class EventbriteGateway:
    """Authenticated access to the Eventbrite v3 API.

    Every call returns the decoded JSON body or raises a ``RemoteRequestError``
    subclass. Retries are left to the caller.
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        if not timeout_s > 0:
            raise ValueError("timeout_s must be a positive number")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def _headers(self) -> dict[str, str]:
        return {
            "authorization": f"Bearer {self._token}",
            "content-type": "application/json",
        }

    def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
        full_url: str | None = None,
    ) -> dict[str, Any]:
        url = full_url or f"{self._api_url}{path}"
        method = method.upper()
        started = time.monotonic()
        try:
            resp = self._session.request(
                method,
                url,
                json=body or None,
                params=query or None,
                headers=self._headers(),
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise RemoteTransportError(
                f"Eventbrite request failed: {exc}",
                method=method,
                url=url,
            ) from exc

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            "Eventbrite request completed",
            extra={
                "method": method,
                "url": url,
                "status_code": resp.status_code,
                "duration_ms": duration_ms,
            },
        )
        if resp.status_code >= 300:
            raise _error_for_status(resp, method, url)
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteRequestError(
                "Eventbrite returned a non-JSON response",
                status_code=resp.status_code,
                method=method,
                url=url,
            ) from exc
        if not isinstance(data, dict):
            raise RemoteRequestError(
                "Eventbrite returned an unexpected JSON payload",
                status_code=resp.status_code,
                method=method,
                url=url,
            )
        return data

    def request_all_items(
        self,
        resource: str,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = dict(query or {})
        items: list[dict[str, Any]] = []
        seen: set[str] = set()
        while True:
            data = self.request(method, path, body, params)
            page = data.get(resource) or []
            items.extend(item for item in page if isinstance(item, dict))
            pagination = data.get("pagination") or {}
            continuation = pagination.get("continuation")
            if not pagination.get("has_more_items") or not continuation:
                break
            if continuation in seen:
                logger.warning(
                    "Eventbrite repeated a continuation token; stopping pagination",
                    extra={"method": method, "url": path},
                )
                break
            seen.add(continuation)
            params["continuation"] = continuation
        return items


def _error_for_status(
    resp: requests.Response,
    method: str,
    url: str,
) -> RemoteRequestError:
    status = resp.status_code
    message = f"Eventbrite HTTP {status}: {_error_detail(resp)}"
    if status == 404:
        return RemoteNotFound(message, status_code=status, method=method, url=url)
    if status in (401, 403):
        return RemoteAuthError(message, status_code=status, method=method, url=url)
    if status in TRANSIENT_STATUSES:
        return RemoteTransportError(
            message,
            status_code=status,
            method=method,
            url=url,
        )
    return RemoteRequestError(message, status_code=status, method=method, url=url)


def _error_detail(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return resp.text
    if isinstance(payload, dict):
        detail = payload.get("error_description") or payload.get("error")
        if detail:
            return str(detail)
    return resp.text
