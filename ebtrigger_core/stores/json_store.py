from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import fsspec

from ebtrigger_core.storage.paths import parent_path, state_uri
from ebtrigger_core.stores.interfaces import StateStore


class JsonStateStore(StateStore):
    """Per-node key/value document kept at ``<base_uri>/state/<node_id>.json``."""

    def __init__(self, base_uri: str, node_id: str) -> None:
        self._base_uri = base_uri
        self._node_id = node_id

    @property
    def uri(self) -> str:
        return state_uri(self._base_uri, self._node_id)

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        values = self._load()
        values[key] = value
        self._save(values)

    def delete(self, key: str) -> None:
        values = self._load()
        if key not in values:
            return
        del values[key]
        self._save(values)

    def _load(self) -> dict[str, Any]:
        fs, path = fsspec.core.url_to_fs(self.uri)
        if not fs.exists(path):
            return {}
        with fs.open(path, "rb") as handle:
            payload = json.loads(handle.read().decode("utf-8"))
        values = payload.get("values") if isinstance(payload, dict) else None
        return dict(values) if isinstance(values, dict) else {}

    def _save(self, values: dict[str, Any]) -> str:
        uri = self.uri
        fs, path = fsspec.core.url_to_fs(uri)
        fs.makedirs(parent_path(path), exist_ok=True)
        payload = {
            "node_id": self._node_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "values": values,
        }
        with fs.open(path, "wb") as handle:
            handle.write(json.dumps(payload, ensure_ascii=True).encode("utf-8"))
        return uri
