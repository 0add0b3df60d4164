from __future__ import annotations

from dataclasses import dataclass

from ebtrigger_core.subscriptions.manager import SubscriptionManager

ACTIVATION_EXISTING = "existing"
ACTIVATION_CREATED = "created"
DEACTIVATION_ABSENT = "absent"
DEACTIVATION_DELETED = "deleted"
DEACTIVATION_FAILED = "failed"


@dataclass(frozen=True)
class ActivationResult:
    outcome: str
    webhook_id: str | None


@dataclass(frozen=True)
class DeactivationResult:
    outcome: str
    webhook_id: str | None


def activate(manager: SubscriptionManager) -> ActivationResult:
    """Verify the stored subscription, creating a new one when it is gone."""
    if manager.check_exists():
        outcome = ACTIVATION_EXISTING
    else:
        manager.create()
        outcome = ACTIVATION_CREATED
    return ActivationResult(outcome=outcome, webhook_id=manager.webhook_id)


def deactivate(manager: SubscriptionManager) -> DeactivationResult:
    webhook_id = manager.webhook_id
    if webhook_id is None:
        return DeactivationResult(outcome=DEACTIVATION_ABSENT, webhook_id=None)
    if manager.delete():
        outcome = DEACTIVATION_DELETED
    else:
        outcome = DEACTIVATION_FAILED
    return DeactivationResult(outcome=outcome, webhook_id=webhook_id)
