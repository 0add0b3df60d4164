import math
import os
from dataclasses import dataclass
from functools import lru_cache

from ebtrigger_core.actions import parse_actions
from ebtrigger_core.errors import ValidationError
from ebtrigger_core.gateway.eventbrite import DEFAULT_API_URL, DEFAULT_TIMEOUT_S
from ebtrigger_core.subscriptions.types import TriggerSettings

DEFAULT_NODE_ID = "eventbrite-trigger"
DEFAULT_STATE_ROOT = "./ebtrigger_data"


@dataclass(frozen=True)
class Config:
    env: str
    log_level: str
    api_token: str
    api_url: str
    timeout_s: float
    organization_id: str | None
    event_id: str | None
    actions: tuple[str, ...]
    callback_url: str | None
    resolve_data: bool
    node_id: str
    state_root: str
    state_store: str
    records_enabled: bool

    def trigger_settings(self) -> TriggerSettings:
        return TriggerSettings(
            callback_url=self.callback_url,
            event_id=self.event_id,
            actions=self.actions,
            organization_id=self.organization_id,
            resolve_data=self.resolve_data,
        )

    @classmethod
    def from_env(cls) -> "Config":
        missing: list[str] = []

        def require(name: str) -> str:
            value = os.getenv(name)
            if value is None or value == "":
                missing.append(name)
                return ""
            return value

        api_token = require("EVENTBRITE_API_TOKEN")
        env = os.getenv("ENV", "dev")
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        api_url = os.getenv("EVENTBRITE_API_URL", DEFAULT_API_URL).rstrip("/")
        timeout_s = _parse_float(
            "EVENTBRITE_TIMEOUT_S",
            os.getenv("EVENTBRITE_TIMEOUT_S", str(DEFAULT_TIMEOUT_S)),
        )
        if not math.isfinite(timeout_s) or timeout_s <= 0:
            raise ValueError("EVENTBRITE_TIMEOUT_S must be a positive number")
        try:
            actions = parse_actions(os.getenv("EVENTBRITE_ACTIONS"))
        except ValidationError as exc:
            raise ValueError(f"EVENTBRITE_ACTIONS: {exc}") from exc
        state_store = os.getenv("STATE_STORE", "json").strip().lower()
        if state_store not in {"json", "memory"}:
            raise ValueError("STATE_STORE must be one of: json, memory")

        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"Missing required env vars: {missing_str}")

        return cls(
            env=env,
            log_level=log_level,
            api_token=api_token,
            api_url=api_url,
            timeout_s=timeout_s,
            organization_id=os.getenv("EVENTBRITE_ORGANIZATION_ID") or None,
            event_id=os.getenv("EVENTBRITE_EVENT_ID") or None,
            actions=actions,
            callback_url=os.getenv("WEBHOOK_CALLBACK_URL") or None,
            resolve_data=_parse_bool(os.getenv("RESOLVE_DATA"), True),
            node_id=os.getenv("TRIGGER_NODE_ID") or DEFAULT_NODE_ID,
            state_root=os.getenv("STATE_ROOT") or DEFAULT_STATE_ROOT,
            state_store=state_store,
            records_enabled=_parse_bool(os.getenv("TRIGGER_RECORDS_ENABLED"), True),
        )


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_config() -> Config:
    return Config.from_env()
