from __future__ import annotations

import logging

import pytest

from ebtrigger_core.errors import (
    RemoteNotFound,
    RemoteRequestError,
    RemoteTransportError,
    SubscriptionStateError,
    ValidationError,
)
from ebtrigger_core.stores.memory_store import MemoryStateStore
from ebtrigger_core.subscriptions import (
    WEBHOOK_ID_KEY,
    SubscriptionManager,
    TriggerSettings,
)


def _settings(**overrides) -> TriggerSettings:
    values = {
        "callback_url": "https://hooks.example.com/webhook",
        "event_id": "evt-100",
        "actions": ("order.placed", "attendee.checked_in"),
    }
    values.update(overrides)
    return TriggerSettings(**values)


def _manager(gateway, store=None, **overrides) -> SubscriptionManager:
    return SubscriptionManager(
        gateway,
        store if store is not None else MemoryStateStore(),
        _settings(**overrides),
        node_id="node-1",
    )


@pytest.mark.core
def test_check_exists_without_stored_id_skips_remote(fake_gateway):
    manager = _manager(fake_gateway)
    assert manager.check_exists() is False
    assert fake_gateway.calls == []


@pytest.mark.core
def test_check_exists_with_live_webhook(fake_gateway):
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.respond("GET", "/webhooks/wh-1/", {"id": "wh-1"})
    manager = _manager(fake_gateway, store)

    assert manager.check_exists() is True
    assert fake_gateway.calls[0]["method"] == "GET"
    assert fake_gateway.calls[0]["path"] == "/webhooks/wh-1/"


@pytest.mark.core
@pytest.mark.parametrize(
    "error",
    [
        RemoteNotFound("gone", status_code=404),
        RemoteTransportError("connection reset"),
    ],
)
def test_check_exists_treats_any_failure_as_absent(fake_gateway, error):
    # Not-found and transient failures are deliberately indistinguishable here.
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.fail("GET", "/webhooks/wh-1/", error)
    manager = _manager(fake_gateway, store)

    assert manager.check_exists() is False
    assert store.get(WEBHOOK_ID_KEY) == "wh-1"


@pytest.mark.core
def test_create_sends_comma_joined_actions_and_stores_id(fake_gateway):
    store = MemoryStateStore()
    fake_gateway.respond("POST", "/webhooks/", {"id": "wh-42"})
    manager = _manager(
        fake_gateway,
        store,
        actions=("ticket_class.updated", "order.placed", "event.updated"),
    )

    assert manager.create() is True
    call = fake_gateway.calls[0]
    assert call["method"] == "POST"
    assert call["path"] == "/webhooks/"
    assert call["body"] == {
        "endpoint_url": "https://hooks.example.com/webhook",
        "actions": "ticket_class.updated,order.placed,event.updated",
        "event_id": "evt-100",
    }
    assert store.get(WEBHOOK_ID_KEY) == "wh-42"
    assert manager.webhook_id == "wh-42"


@pytest.mark.core
def test_create_logs_event_and_organization(fake_gateway, caplog):
    fake_gateway.respond("POST", "/webhooks/", {"id": "wh-9"})
    manager = _manager(fake_gateway, organization_id="org-7")

    with caplog.at_level(logging.INFO, logger="ebtrigger_core.subscriptions.manager"):
        assert manager.create() is True

    record = next(
        r for r in caplog.records if r.message == "Webhook subscription created"
    )
    assert record.webhook_id == "wh-9"
    assert record.event_id == "evt-100"
    assert record.organization_id == "org-7"


@pytest.mark.core
def test_create_propagates_remote_errors(fake_gateway):
    store = MemoryStateStore()
    fake_gateway.fail(
        "POST",
        "/webhooks/",
        RemoteRequestError("bad request", status_code=400),
    )
    manager = _manager(fake_gateway, store)

    with pytest.raises(RemoteRequestError):
        manager.create()
    assert store.get(WEBHOOK_ID_KEY) is None


@pytest.mark.core
def test_create_requires_returned_id(fake_gateway):
    fake_gateway.respond("POST", "/webhooks/", {})
    manager = _manager(fake_gateway)

    with pytest.raises(RemoteRequestError):
        manager.create()
    assert manager.webhook_id is None


@pytest.mark.core
@pytest.mark.parametrize(
    "overrides",
    [
        {"actions": ()},
        {"callback_url": None},
        {"event_id": ""},
    ],
)
def test_create_rejects_incomplete_settings(fake_gateway, overrides):
    manager = _manager(fake_gateway, **overrides)

    with pytest.raises(ValidationError):
        manager.create()
    assert fake_gateway.calls == []


@pytest.mark.core
def test_delete_success_clears_id(fake_gateway):
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.respond("DELETE", "/webhooks/wh-1/", {"success": True})
    manager = _manager(fake_gateway, store)

    assert manager.delete() is True
    assert store.get(WEBHOOK_ID_KEY) is None
    assert fake_gateway.calls[0]["method"] == "DELETE"


@pytest.mark.core
def test_delete_unconfirmed_keeps_id(fake_gateway):
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.respond("DELETE", "/webhooks/wh-1/", {"success": False})
    manager = _manager(fake_gateway, store)

    assert manager.delete() is False
    assert store.get(WEBHOOK_ID_KEY) == "wh-1"


@pytest.mark.core
def test_delete_remote_error_keeps_id(fake_gateway):
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.fail("DELETE", "/webhooks/wh-1/", RemoteTransportError("timeout"))
    manager = _manager(fake_gateway, store)

    assert manager.delete() is False
    assert store.get(WEBHOOK_ID_KEY) == "wh-1"


@pytest.mark.core
def test_second_delete_fails_fast(fake_gateway):
    store = MemoryStateStore({WEBHOOK_ID_KEY: "wh-1"})
    fake_gateway.respond("DELETE", "/webhooks/wh-1/", {"success": True})
    manager = _manager(fake_gateway, store)

    assert manager.delete() is True
    with pytest.raises(SubscriptionStateError):
        manager.delete()
    assert len(fake_gateway.calls) == 1
