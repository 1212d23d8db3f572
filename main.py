"""
ChessDemo — terminal entry point.

Wires together:  config → personality picker → session → auto-play driver → CLI display

Usage:
    python main.py [config.yaml]
"""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

from chessdemo.cli.display import display_event, console
from chessdemo.cli.selector import select_personalities
from chessdemo.config import Config, load_config
from chessdemo.game import run_autoplay
from chessdemo.session import DemoSession


def _load(config_path: Path) -> Config:
    if not config_path.exists() and len(sys.argv) < 2:
        # No config.yaml next to us: run with the built-in defaults.
        return Config()
    try:
        return load_config(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/] {exc}")
        sys.exit(1)
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)


async def _main(session: DemoSession) -> None:
    async for event in run_autoplay(session):
        display_event(event)


def main() -> None:
    config = _load(Path(sys.argv[1] if len(sys.argv) > 1 else "config.yaml"))

    white, black = select_personalities(config)
    config.demo.white_personality = white
    config.demo.black_personality = black

    async def _run() -> None:
        session = DemoSession(config)
        loop = asyncio.get_running_loop()

        original_sigint = signal.getsignal(signal.SIGINT)

        def _on_sigint(sig: int, frame: object) -> None:
            # Schedule the stop on the event loop thread (safe on Windows)
            loop.call_soon_threadsafe(session.request_stop)
            # Restore the original handler so a second Ctrl+C force-quits
            signal.signal(signal.SIGINT, original_sigint)

        signal.signal(signal.SIGINT, _on_sigint)
        await _main(session)

    asyncio.run(_run())


if __name__ == "__main__":
    main()
