"""
Rich-based CLI event consumer.

This is the ONLY place where terminal output happens.
It translates GameEvent objects into formatted Rich output, the terminal
counterpart of the browser's board, eval bar, captured-piece trays and
move list.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from chessdemo.events import (
    GameEvent,
    GameStartEvent,
    MoveAppliedEvent,
    CheckEvent,
    SpeedChangedEvent,
    GameOverEvent,
    RestartScheduledEvent,
)
from chessdemo.renderer import PIECE_SYMBOLS, format_history

console = Console(legacy_windows=False)

_BAR_WIDTH = 30


def display_event(event: GameEvent) -> None:
    """Dispatch a GameEvent to the appropriate display function."""
    match event:
        case GameStartEvent():
            _game_start(event)
        case MoveAppliedEvent():
            _move_applied(event)
        case CheckEvent():
            _check(event)
        case SpeedChangedEvent():
            console.print(f"  [dim]{event.label} ({event.delay_ms} ms/move)[/]")
        case GameOverEvent():
            _game_over(event)
        case RestartScheduledEvent():
            console.print(f"[dim]Restarting in {event.delay_seconds:g}s…[/]")


# --------------------------------------------------------------------------- #
# Display functions                                                            #
# --------------------------------------------------------------------------- #

def _game_start(event: GameStartEvent) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold white]{event.white_personality}[/] [dim](White)[/]  vs  "
            f"[bold white]{event.black_personality}[/] [dim](Black)[/]\n"
            f"[dim]{event.timestamp.strftime('%Y-%m-%d %H:%M:%S')}[/]",
            title=f"[bold green] Game {event.game_number} [/]",
            border_style="green",
            expand=False,
        )
    )
    console.print(Panel(event.board_unicode, border_style="dim", expand=False))


def eval_bar_text(white_pct: float, width: int = _BAR_WIDTH) -> str:
    """Horizontal bar: white's share as █, black's as ░."""
    filled = round(width * white_pct / 100)
    return "█" * filled + "░" * (width - filled)


def _tray(pieces: list[str], color: str) -> str:
    return "".join(PIECE_SYMBOLS[color][p] for p in pieces)


def _move_applied(event: MoveAppliedEvent) -> None:
    symbol = "♔" if event.color == "white" else "♚"
    color_style = "bold white" if event.color == "white" else "bold bright_black"
    check_tag = "  [bold red]+[/]" if event.is_check else ""
    opening = f"  [cyan]{event.opening}[/]" if event.opening else ""

    console.print()
    console.print(
        f"[dim]Move {event.move_number}[/]  [{color_style}]{symbol}[/] "
        f"[bold]{event.move_san}[/]{check_tag}  [dim]({event.move_uci}, {event.sound})[/]{opening}"
    )
    console.print(
        Panel(
            event.board_unicode_after,
            subtitle=f"[dim]{event.fen_after}[/]",
            border_style="dim",
            padding=(0, 1),
            expand=False,
        )
    )
    console.print(
        f"  W {event.material_white:>2} {eval_bar_text(event.eval_white_pct)} "
        f"{event.material_black:<2} B"
    )
    # White's tray shows the black pieces it has taken, and vice versa.
    if event.captured_by_white or event.captured_by_black:
        console.print(
            f"  [dim]White took:[/] {_tray(event.captured_by_white, 'b')}  "
            f"[dim]Black took:[/] {_tray(event.captured_by_black, 'w')}"
        )
    console.print(f"[dim]History:[/] {format_history(event.history_san)}")


def _check(event: CheckEvent) -> None:
    console.print(
        f"  [bold red]CHECK![/] "
        f"{event.color_in_check.upper()} is in check after [bold]{event.checking_move_san}[/]"
    )


def _game_over(event: GameOverEvent) -> None:
    result_styles: dict[str, str] = {
        "1-0": "bold green",
        "0-1": "bold red",
        "1/2-1/2": "bold yellow",
        "*": "dim",
    }
    style = result_styles.get(event.result, "white")
    reason = event.reason.replace("_", " ").title()

    console.print()
    console.print(
        Panel(
            f"[{style}]{event.result}[/]  —  {reason}\n"
            f"{event.status_text}\n"
            f"[dim]Total moves: {event.total_moves}[/]",
            title="[bold]Game Over[/]",
            border_style=style.replace("bold ", ""),
            expand=False,
        )
    )

    console.print()
    console.rule("[dim]PGN[/]")
    console.print(event.pgn)
    console.rule()
