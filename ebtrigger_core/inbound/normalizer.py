from __future__ import annotations

from typing import Any

from ebtrigger_core.gateway.interfaces import ApiGateway
from ebtrigger_core.inbound.types import parse_notification, resolvable_url
from ebtrigger_core.logging import get_logger

# Eventbrite's "send test webhook" feature posts this unresolvable URL.
TEST_URL_MARKER = "api-endpoint-to-fetch-object-details"
PLACEHOLDER_MESSAGE = (
    "Test received. To display actual data of object get the webhook "
    "triggered by performing the action which triggers it."
)

logger = get_logger(__name__)


class InboundNormalizer:
    def __init__(self, gateway: ApiGateway) -> None:
        self._gateway = gateway

    def handle(self, body: object, resolve_data: bool) -> list[dict[str, Any]]:
        """Turn one Eventbrite callback body into workflow records.

        Raises ``ValidationError`` when ``api_url`` is missing, or when it is
        not a usable URL and the data has to be resolved. Errors from the
        resolve fetch propagate to the caller.
        """
        notification = parse_notification(body)
        if not resolve_data:
            return [notification.raw]

        api_url = resolvable_url(notification)
        if TEST_URL_MARKER in api_url:
            logger.info(
                "Test webhook received",
                extra={
                    "url": api_url,
                    "action": notification.action,
                    "resolve_data": True,
                },
            )
            return [{"placeholder": PLACEHOLDER_MESSAGE}]

        logger.debug(
            "Resolving webhook data",
            extra={"url": api_url, "action": notification.action},
        )
        resolved = self._gateway.request("GET", "", {}, None, api_url)
        return [resolved]
