from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ebtrigger_core.errors import ValidationError


@dataclass(frozen=True)
class InboundNotification:
    api_url: object
    config: dict[str, Any] | None
    raw: dict[str, Any] = field(repr=False)

    @property
    def action(self) -> str | None:
        if not self.config:
            return None
        action = self.config.get("action")
        return str(action) if action else None


def parse_notification(body: object) -> InboundNotification:
    if not isinstance(body, dict):
        raise ValidationError("The received data is not a JSON object")
    api_url = body.get("api_url")
    if api_url is None:
        raise ValidationError(
            'The received data does not contain required "api_url" property!'
        )
    config = body.get("config")
    return InboundNotification(
        api_url=api_url,
        config=config if isinstance(config, dict) else None,
        raw=body,
    )


def resolvable_url(notification: InboundNotification) -> str:
    api_url = notification.api_url
    if not isinstance(api_url, str) or not api_url.strip():
        raise ValidationError('The "api_url" property must be a non-empty string')
    return api_url
