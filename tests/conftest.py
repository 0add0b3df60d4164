from __future__ import annotations

from typing import Any, Iterator

import pytest

from ebtrigger_core.config import get_config


@pytest.fixture(autouse=True)
def _trigger_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.setenv("EVENTBRITE_API_TOKEN", "test-token")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("STATE_ROOT", (tmp_path / "state_root").as_posix())
    monkeypatch.setenv("STATE_STORE", "json")
    monkeypatch.setenv("TRIGGER_NODE_ID", "node-1")
    monkeypatch.setenv("EVENTBRITE_EVENT_ID", "evt-100")
    monkeypatch.setenv("EVENTBRITE_ACTIONS", "order.placed,attendee.checked_in")
    monkeypatch.setenv("WEBHOOK_CALLBACK_URL", "https://hooks.example.com/webhook")
    monkeypatch.delenv("RESOLVE_DATA", raising=False)
    monkeypatch.delenv("TRIGGER_RECORDS_ENABLED", raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


class FakeGateway:
    """Records every call and answers from a (method, target) table."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._responses: dict[tuple[str, str], Any] = {}

    def respond(self, method: str, target: str, payload: Any) -> None:
        self._responses[(method, target)] = payload

    def fail(self, method: str, target: str, exc: Exception) -> None:
        self._responses[(method, target)] = exc

    def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
        full_url: str | None = None,
    ) -> dict[str, Any]:
        self.calls.append(
            {
                "method": method,
                "path": path,
                "body": body,
                "query": query,
                "full_url": full_url,
            }
        )
        value = self._responses.get((method, full_url or path), {})
        if isinstance(value, Exception):
            raise value
        return value

    def request_all_items(
        self,
        resource: str,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        payload = self.request(method, path, body, query)
        return list(payload.get(resource, []))


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()
