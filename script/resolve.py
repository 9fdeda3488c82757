from __future__ import annotations

"""Resolve the startup entrypoint once, using the production wiring.

Useful for checking what a freshly launched app would show, and for
simulating the web surface callbacks from the command line.

Usage:
    python script/resolve.py
    python script/resolve.py --record-success https://shop.example/app
    python script/resolve.py --record-failure https://shop.example/app --reason "net error"
    python script/resolve.py --show-state
    python script/resolve.py --clear-state
"""

import argparse
import json
import sys
from typing import Sequence

from loguru import logger
from rich.console import Console
from rich.table import Table

from shopfront.config import get_settings
from shopfront.entrypoint.factory import build_resolver
from shopfront.entrypoint.models import ResolvedEntrypoint
from shopfront.logs import configure_logging

console = Console()
log = logger.bind(module="script.resolve")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve the Shopfront startup entrypoint.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--record-success", metavar="URL", help="Report a successful main-frame load.")
    action.add_argument("--record-failure", metavar="URL", help="Report a failed main-frame load.")
    action.add_argument("--show-state", action="store_true", help="Print the persisted URL slots.")
    action.add_argument("--clear-state", action="store_true", help="Forget both persisted URLs.")
    parser.add_argument("--reason", default="reported from CLI", help="Failure reason for --record-failure.")
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    return parser


def _render(entrypoint: ResolvedEntrypoint, *, json_output: bool) -> None:
    payload = {
        "kind": entrypoint.kind.value,
        "url": entrypoint.url,
        "source": entrypoint.source.value if entrypoint.source else None,
        "reason": entrypoint.reason.value if entrypoint.reason else None,
    }
    if json_output:
        console.print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    table = Table(title="Shopfront entrypoint", show_lines=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in payload.items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)

    settings = get_settings()
    configure_logging(settings.log_level)
    resolver = build_resolver(settings)

    if args.show_state:
        state = resolver.state.as_dict()
        if args.json_output:
            console.print(json.dumps(state, ensure_ascii=False, indent=2))
        else:
            for key, value in state.items():
                console.print(f"[cyan]{key}[/] {value or '-'}")
        return 0

    if args.clear_state:
        resolver.state.clear()
        console.print("[bold yellow]Persisted URLs cleared[/]")
        return 0

    if args.record_success:
        resolver.record_successful_load(args.record_success)
        console.print(f"[bold green]Recorded successful load[/] {args.record_success}")
        return 0

    if args.record_failure:
        _render(resolver.record_load_failure(args.record_failure, args.reason), json_output=args.json_output)
        return 0

    _render(resolver.resolve_entrypoint(), json_output=args.json_output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
