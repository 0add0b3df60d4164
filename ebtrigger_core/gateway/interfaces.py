from __future__ import annotations

from typing import Any, Protocol


class ApiGateway(Protocol):
    def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
        full_url: str | None = None,
    ) -> dict[str, Any]:
        ...

    def request_all_items(
        self,
        resource: str,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        ...
