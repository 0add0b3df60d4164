from __future__ import annotations

from typing import Iterable

from ebtrigger_core.errors import ValidationError

EVENTBRITE_ACTIONS: tuple[str, ...] = (
    "attendee.updated",
    "attendee.checked_in",
    "attendee.checked_out",
    "event.created",
    "event.published",
    "event.unpublished",
    "event.updated",
    "order.placed",
    "order.refunded",
    "order.updated",
    "organizer.updated",
    "ticket_class.created",
    "ticket_class.deleted",
    "ticket_class.updated",
    "venue.updated",
)

_KNOWN_ACTIONS = frozenset(EVENTBRITE_ACTIONS)


def normalize_actions(actions: Iterable[str] | None) -> tuple[str, ...]:
    """Strip, de-duplicate and validate action names, keeping their order."""
    if not actions:
        return ()
    results: list[str] = []
    seen: set[str] = set()
    for item in actions:
        name = str(item).strip()
        if not name or name in seen:
            continue
        if name not in _KNOWN_ACTIONS:
            raise ValidationError(f"Unknown Eventbrite action: {name}")
        results.append(name)
        seen.add(name)
    return tuple(results)


def parse_actions(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return normalize_actions(raw.split(","))
