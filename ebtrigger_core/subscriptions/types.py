from __future__ import annotations

from dataclasses import dataclass

WEBHOOK_ID_KEY = "webhookId"


@dataclass(frozen=True)
class TriggerSettings:
    callback_url: str | None
    event_id: str | None
    actions: tuple[str, ...]
    organization_id: str | None = None
    resolve_data: bool = True


@dataclass(frozen=True)
class Subscription:
    callback_url: str
    event_id: str
    actions: tuple[str, ...]


def subscription_to_request(subscription: Subscription) -> dict[str, str]:
    return {
        "endpoint_url": subscription.callback_url,
        "actions": ",".join(subscription.actions),
        "event_id": subscription.event_id,
    }
