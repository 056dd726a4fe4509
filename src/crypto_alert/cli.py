"""Command-line entry point: run the monitor or manage alerts."""

from __future__ import annotations

import argparse
import asyncio
import sys

from crypto_alert.config import AppConfig, load_config
from crypto_alert.errors import InvalidAsset, InvalidThreshold
from crypto_alert.logging import setup_logging
from crypto_alert.models import AlertCondition
from crypto_alert.monitor import runner
from crypto_alert.presentation import describe_alert


def _cmd_run(config: AppConfig, args: argparse.Namespace) -> int:
    try:
        asyncio.run(runner.run(config))
    except KeyboardInterrupt:
        pass
    return 0


def _cmd_add(config: AppConfig, args: argparse.Namespace) -> int:
    store = runner.open_store(config)
    try:
        alert = store.create(args.asset, args.condition, args.price)
    except (InvalidAsset, InvalidThreshold) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if alert.asset not in config.assets:
        print(f"Warning: {alert.asset!r} is not a tracked asset", file=sys.stderr)
    print(f"Alert {alert.id} set for {describe_alert(alert)}")
    return 0


def _cmd_list(config: AppConfig, args: argparse.Namespace) -> int:
    store = runner.open_store(config)
    alerts = store.list(include_triggered=args.all)
    if not alerts:
        print("No active alerts.")
        return 0
    for alert in alerts:
        status = "triggered" if alert.triggered else "active"
        print(f"{alert.id}  {describe_alert(alert)}  [{status}]")
    return 0


def _cmd_remove(config: AppConfig, args: argparse.Namespace) -> int:
    store = runner.open_store(config)
    if store.remove(args.id):
        print(f"Removed alert {args.id}")
    else:
        print(f"Alert {args.id} not found")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crypto-alert", description="Crypto price alerts")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Poll prices and evaluate alerts")
    p_run.set_defaults(func=_cmd_run)

    p_add = sub.add_parser("add", help="Create a price alert")
    p_add.add_argument("asset", help="Coin id, e.g. bitcoin")
    p_add.add_argument("condition", choices=[c.value for c in AlertCondition])
    p_add.add_argument("price", help="Threshold price")
    p_add.set_defaults(func=_cmd_add)

    p_list = sub.add_parser("list", help="Show alerts")
    p_list.add_argument("--all", action="store_true", help="Include triggered alerts")
    p_list.set_defaults(func=_cmd_list)

    p_remove = sub.add_parser("remove", help="Delete an alert")
    p_remove.add_argument("id", type=int)
    p_remove.set_defaults(func=_cmd_remove)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    sys.exit(args.func(config, args))
