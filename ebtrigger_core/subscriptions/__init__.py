from ebtrigger_core.subscriptions.lifecycle import (
    ActivationResult,
    DeactivationResult,
    activate,
    deactivate,
)
from ebtrigger_core.subscriptions.manager import SubscriptionManager
from ebtrigger_core.subscriptions.types import (
    WEBHOOK_ID_KEY,
    Subscription,
    TriggerSettings,
    subscription_to_request,
)

__all__ = [
    "ActivationResult",
    "DeactivationResult",
    "Subscription",
    "SubscriptionManager",
    "TriggerSettings",
    "WEBHOOK_ID_KEY",
    "activate",
    "deactivate",
    "subscription_to_request",
]
