from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Iterable

import fsspec

from ebtrigger_core.storage.paths import parent_path, records_uri


def write_trigger_records(
    *,
    base_uri: str,
    node_id: str,
    run_id: str,
    records: Iterable[dict[str, Any]],
) -> str:
    now = datetime.now(timezone.utc).isoformat()
    dest_uri = records_uri(base_uri, node_id, run_id)
    fs, path = fsspec.core.url_to_fs(dest_uri)
    fs.makedirs(parent_path(path), exist_ok=True)
    with fs.open(path, "wb") as handle:
        header = {"run_id": run_id, "node_id": node_id, "written_at": now}
        handle.write((json.dumps(header) + "\n").encode("utf-8"))
        for record in records:
            handle.write((json.dumps(record) + "\n").encode("utf-8"))
    return dest_uri


def read_trigger_records(uri: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    fs, path = fsspec.core.url_to_fs(uri)
    with fs.open(path, "rb") as handle:
        lines = handle.read().decode("utf-8").splitlines()
    items = [json.loads(line) for line in lines if line.strip()]
    if not items:
        return {}, []
    return items[0], items[1:]
