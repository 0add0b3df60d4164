from __future__ import annotations

from ebtrigger_core.actions import normalize_actions
from ebtrigger_core.errors import (
    RemoteRequestError,
    SubscriptionStateError,
    ValidationError,
)
from ebtrigger_core.gateway.interfaces import ApiGateway
from ebtrigger_core.logging import get_logger
from ebtrigger_core.stores.interfaces import StateStore
from ebtrigger_core.subscriptions.types import (
    WEBHOOK_ID_KEY,
    Subscription,
    TriggerSettings,
    subscription_to_request,
)

logger = get_logger(__name__)


class SubscriptionManager:
    """Keeps one Eventbrite webhook subscription in step with node activation.

    The stored webhook id is the only durable state. Everything else is
    rebuilt from ``settings`` on each call. ``check_exists`` never mutates the
    store; ``delete`` is the only operation that clears the id. Callers must
    not run ``create`` and ``delete`` concurrently for the same node.
    """

    def __init__(
        self,
        gateway: ApiGateway,
        store: StateStore,
        settings: TriggerSettings,
        *,
        node_id: str | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._settings = settings
        self._node_id = node_id

    @property
    def webhook_id(self) -> str | None:
        value = self._store.get(WEBHOOK_ID_KEY)
        if value is None or value == "":
            return None
        return str(value)

    def check_exists(self) -> bool:
        webhook_id = self.webhook_id
        if webhook_id is None:
            return False
        try:
            self._gateway.request("GET", _webhook_path(webhook_id))
        except RemoteRequestError as exc:
            # Not-found and transport failures are reported the same way.
            logger.warning(
                "Webhook lookup failed; treating subscription as absent",
                extra={
                    "node_id": self._node_id,
                    "webhook_id": webhook_id,
                    "status_code": exc.status_code,
                    "error_message": str(exc),
                },
            )
            return False
        return True

    def create(self) -> bool:
        subscription = self.build_subscription()
        response = self._gateway.request(
            "POST",
            "/webhooks/",
            subscription_to_request(subscription),
        )
        webhook_id = response.get("id")
        if webhook_id is None or webhook_id == "":
            raise RemoteRequestError(
                "Eventbrite did not return a webhook id",
                method="POST",
                url="/webhooks/",
            )
        self._store.set(WEBHOOK_ID_KEY, str(webhook_id))
        logger.info(
            "Webhook subscription created",
            extra={
                "node_id": self._node_id,
                "webhook_id": str(webhook_id),
                "event_id": subscription.event_id,
                "organization_id": self._settings.organization_id,
                "actions": list(subscription.actions),
                "status": "created",
            },
        )
        return True

    def delete(self) -> bool:
        webhook_id = self.webhook_id
        if webhook_id is None:
            raise SubscriptionStateError("No webhook subscription is stored")
        try:
            response = self._gateway.request("DELETE", _webhook_path(webhook_id))
        except RemoteRequestError as exc:
            logger.warning(
                "Webhook delete failed; keeping stored id",
                extra={
                    "node_id": self._node_id,
                    "webhook_id": webhook_id,
                    "status_code": exc.status_code,
                    "error_message": str(exc),
                },
            )
            return False
        if not response.get("success"):
            logger.warning(
                "Eventbrite did not confirm webhook deletion",
                extra={"node_id": self._node_id, "webhook_id": webhook_id},
            )
            return False
        self._store.delete(WEBHOOK_ID_KEY)
        logger.info(
            "Webhook subscription deleted",
            extra={
                "node_id": self._node_id,
                "webhook_id": webhook_id,
                "status": "deleted",
            },
        )
        return True

    def build_subscription(self) -> Subscription:
        settings = self._settings
        if not settings.callback_url:
            raise ValidationError("A callback URL is required to create a webhook")
        if not settings.event_id:
            raise ValidationError("An Eventbrite event id is required")
        actions = normalize_actions(settings.actions)
        if not actions:
            raise ValidationError("At least one action is required")
        return Subscription(
            callback_url=settings.callback_url,
            event_id=str(settings.event_id),
            actions=actions,
        )


def _webhook_path(webhook_id: str) -> str:
    return f"/webhooks/{webhook_id}/"
