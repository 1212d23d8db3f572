"""
Interactive personality selection for White and Black at startup.

Displays a numbered table of all personalities, plus a "random each game"
entry, and prompts the user to pick one for each colour.
"""

from __future__ import annotations

from rich.console import Console
from rich.prompt import IntPrompt
from rich.table import Table

from chessdemo.config import Config
from chessdemo.personality import Personality

console = Console(legacy_windows=False)

RANDOM_CHOICE = 0


def select_personalities(config: Config) -> tuple[str | None, str | None]:
    """
    Prompt for White's and Black's personality.

    Returns a (white, black) tuple of personality names; None means
    "draw a fresh one at random every game". A side pinned in config.yaml
    is offered as the default answer, so pressing Enter keeps it.
    """
    entries = sorted(config.personality_pool().values(), key=lambda p: p.name)
    _print_personality_table(entries)
    names = [p.name for p in entries]

    choices = [str(i) for i in range(0, len(entries) + 1)]

    white_idx = IntPrompt.ask(
        "\n[bold white]♔  White personality?[/]",
        choices=choices,
        show_choices=False,
        default=_default_choice(names, config.demo.white_personality),
    )
    black_idx = IntPrompt.ask(
        "[bold bright_black]♚  Black personality?[/]",
        choices=choices,
        show_choices=False,
        default=_default_choice(names, config.demo.black_personality),
    )

    white = entries[white_idx - 1].name if white_idx != RANDOM_CHOICE else None
    black = entries[black_idx - 1].name if black_idx != RANDOM_CHOICE else None

    console.print(
        f"\n  White: [bold]{white or 'random'}[/]  vs  Black: [bold]{black or 'random'}[/]\n"
    )
    return white, black


def _default_choice(names: list[str], pinned: str | None) -> int:
    if pinned in names:
        return names.index(pinned) + 1
    return RANDOM_CHOICE


def _print_personality_table(entries: list[Personality]) -> None:
    table = Table(
        title="Personalities",
        show_header=True,
        header_style="bold",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Name", min_width=12)
    table.add_column("Capture", justify="right")
    table.add_column("Check", justify="right")
    table.add_column("Center", justify="right")
    table.add_column("Promotion", justify="right")
    table.add_column("Style", style="dim")

    table.add_row(str(RANDOM_CHOICE), "[italic]random each game[/]", "", "", "", "", "")
    for i, p in enumerate(entries, 1):
        table.add_row(
            str(i),
            p.name,
            f"{p.capture_weight:g}",
            f"{p.check_weight:g}",
            f"{p.center_weight:g}",
            f"{p.promotion_weight:g}",
            p.description,
        )

    console.print()
    console.print(table)
