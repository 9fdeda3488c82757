from __future__ import annotations

"""Entry script for running the Shopfront Streamlit shell.

Usage:

    python script/run_ui.py
"""

import argparse
import signal
import subprocess
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console

console = Console()

_APP_PATH = Path(__file__).resolve().parents[1] / "shopfront" / "ui" / "app.py"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the Shopfront Streamlit shell.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Streamlit bind host.")
    parser.add_argument("--port", type=int, default=8501, help="Streamlit bind port.")
    parser.add_argument("--headless", action="store_true", help="Run without opening a browser.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)

    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(_APP_PATH),
        "--server.address",
        str(args.host),
        "--server.port",
        str(int(args.port)),
    ]
    if args.headless:
        cmd += ["--server.headless", "true"]

    console.log(f"[bold green]Shopfront UI online[/] host={args.host} port={args.port}")

    try:
        proc = subprocess.Popen(cmd)
    except FileNotFoundError as exc:  # pragma: no cover
        console.log(
            "[bold red]Failed to start Streamlit[/] "
            "Install with `pip install -e .[ui]` and retry. "
            f"reason={exc}"
        )
        return 1

    try:
        return int(proc.wait())
    except KeyboardInterrupt:
        console.log("[yellow]Keyboard interrupt received[/]; stopping UI...")
        proc.send_signal(signal.SIGINT)
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            console.log("[yellow]UI did not stop after SIGINT; terminating...[/]")
            proc.terminate()
            proc.wait(timeout=5)
        return 130


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
