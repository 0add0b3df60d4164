from __future__ import annotations

from functools import lru_cache

from ebtrigger_core.config import Config
from ebtrigger_core.gateway.eventbrite import EventbriteGateway
from ebtrigger_core.gateway.interfaces import ApiGateway
from ebtrigger_core.inbound.normalizer import InboundNormalizer
from ebtrigger_core.stores.interfaces import StateStore
from ebtrigger_core.stores.json_store import JsonStateStore
from ebtrigger_core.stores.memory_store import MemoryStateStore
from ebtrigger_core.subscriptions.manager import SubscriptionManager

_MEMORY_STORES: dict[str, MemoryStateStore] = {}


def build_gateway(config: Config) -> ApiGateway:
    return shared_gateway(config.api_token, config.api_url, config.timeout_s)


@lru_cache(maxsize=8)
def shared_gateway(
    api_token: str,
    api_url: str,
    timeout_s: float,
) -> EventbriteGateway:
    """One gateway, and so one HTTP connection pool, per process and token."""
    return EventbriteGateway(api_token, api_url=api_url, timeout_s=timeout_s)


def build_store(config: Config) -> StateStore:
    if config.state_store == "memory":
        # Shared per process so the id survives between requests.
        return _MEMORY_STORES.setdefault(config.node_id, MemoryStateStore())
    return JsonStateStore(config.state_root, config.node_id)


def build_manager(
    config: Config,
    *,
    gateway: ApiGateway | None = None,
    store: StateStore | None = None,
) -> SubscriptionManager:
    return SubscriptionManager(
        gateway or build_gateway(config),
        store or build_store(config),
        config.trigger_settings(),
        node_id=config.node_id,
    )


def build_normalizer(
    config: Config,
    *,
    gateway: ApiGateway | None = None,
) -> InboundNormalizer:
    return InboundNormalizer(gateway or build_gateway(config))
