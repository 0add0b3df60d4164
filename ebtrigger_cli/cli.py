from __future__ import annotations

import argparse
import json
import subprocess
import sys
from typing import Any

from ebtrigger_core.config import Config, get_config
from ebtrigger_core.runtime import build_gateway, build_manager
from ebtrigger_core.subscriptions.lifecycle import (
    DEACTIVATION_FAILED,
    activate,
    deactivate,
)
from ebtrigger_core.subscriptions.manager import SubscriptionManager

SERVICE_TARGET = "ebtrigger_service.webhook_service:app"


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _build_gateway(config: Config):
    return build_gateway(config)


def _manager() -> tuple[Config, SubscriptionManager]:
    config = get_config()
    return config, build_manager(config, gateway=_build_gateway(config))


def _uvicorn_cmd(target: str, host: str, port: int, log_level: str) -> list[str]:
    return [
        "uvicorn",
        target,
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        log_level,
    ]


def cmd_status(args: argparse.Namespace) -> int:
    config, manager = _manager()
    _print_json(
        {
            "node_id": config.node_id,
            "webhook_id": manager.webhook_id,
            "exists": manager.check_exists(),
        }
    )
    return 0


def cmd_activate(args: argparse.Namespace) -> int:
    config, manager = _manager()
    result = activate(manager)
    _print_json(
        {
            "node_id": config.node_id,
            "outcome": result.outcome,
            "webhook_id": result.webhook_id,
        }
    )
    return 0


def cmd_deactivate(args: argparse.Namespace) -> int:
    config, manager = _manager()
    result = deactivate(manager)
    _print_json(
        {
            "node_id": config.node_id,
            "outcome": result.outcome,
            "webhook_id": result.webhook_id,
        }
    )
    return 1 if result.outcome == DEACTIVATION_FAILED else 0


def cmd_up(args: argparse.Namespace) -> int:
    cmd = _uvicorn_cmd(SERVICE_TARGET, args.host, args.port, args.log_level)
    if args.dry_run:
        print(" ".join(cmd))
        return 0
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ebtrigger")
    subparsers = parser.add_subparsers(dest="command")

    status_parser = subparsers.add_parser(
        "status", help="Show the stored webhook and whether Eventbrite has it"
    )
    status_parser.set_defaults(func=cmd_status)

    activate_parser = subparsers.add_parser(
        "activate", help="Ensure the Eventbrite webhook subscription exists"
    )
    activate_parser.set_defaults(func=cmd_activate)

    deactivate_parser = subparsers.add_parser(
        "deactivate", help="Delete the stored Eventbrite webhook subscription"
    )
    deactivate_parser.set_defaults(func=cmd_deactivate)

    up_parser = subparsers.add_parser("up", help="Run the trigger service")
    up_parser.add_argument("--host", default="0.0.0.0")
    up_parser.add_argument("--port", type=int, default=8090)
    up_parser.add_argument("--log-level", default="info")
    up_parser.add_argument("--dry-run", action="store_true", help="Print command only")
    up_parser.set_defaults(func=cmd_up)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        parser.print_help()
        return 2
    try:
        return args.func(args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
