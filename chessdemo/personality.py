"""
Named heuristic weight sets ("personalities") for the scripted players.

A Personality only shapes move preference inside selector.select_move().
Each side keeps the same personality for a whole game; a fresh pair is drawn
at every reset unless the session pins one.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class Personality:
    name: str
    capture_weight: float
    check_weight: float
    center_weight: float
    promotion_weight: float
    description: str = ""


# "balanced" reproduces the weights the demo shipped with before personalities
# existed: capture x10, promotion x5, center +0.5.
PERSONALITIES: dict[str, Personality] = {
    p.name: p
    for p in (
        Personality(
            name="balanced",
            capture_weight=10.0,
            check_weight=1.0,
            center_weight=0.5,
            promotion_weight=5.0,
            description="Grabs material, likes the center a little.",
        ),
        Personality(
            name="aggressive",
            capture_weight=14.0,
            check_weight=3.0,
            center_weight=0.25,
            promotion_weight=5.0,
            description="Trades at every opportunity and loves giving check.",
        ),
        Personality(
            name="positional",
            capture_weight=6.0,
            check_weight=0.5,
            center_weight=2.0,
            promotion_weight=5.0,
            description="Occupies the center before chasing material.",
        ),
        Personality(
            name="tactician",
            capture_weight=10.0,
            check_weight=4.0,
            center_weight=0.5,
            promotion_weight=6.0,
            description="Checks first, asks questions later.",
        ),
        Personality(
            name="cautious",
            capture_weight=5.0,
            check_weight=0.25,
            center_weight=1.0,
            promotion_weight=8.0,
            description="Avoids trades and pushes passed pawns.",
        ),
    )
}


def get_personality(
    name: str,
    extra: Mapping[str, Personality] | None = None,
) -> Personality:
    """
    Look up a personality by name, checking user-defined ones first.

    Raises:
        ValueError: no personality with that name exists.
    """
    pool = all_personalities(extra)
    try:
        return pool[name]
    except KeyError:
        known = ", ".join(sorted(pool))
        raise ValueError(f"Unknown personality '{name}'. Known: {known}") from None


def all_personalities(
    extra: Mapping[str, Personality] | None = None,
) -> dict[str, Personality]:
    """Built-in table merged with user-defined entries (user entries win)."""
    pool = dict(PERSONALITIES)
    if extra:
        pool.update(extra)
    return pool


def random_pair(
    pool: Mapping[str, Personality] | None = None,
    rng: random.Random | None = None,
) -> tuple[Personality, Personality]:
    """Draw (white, black) independently and uniformly. Mirror matches are allowed."""
    choices = list((pool or PERSONALITIES).values())
    r = rng or random
    return r.choice(choices), r.choice(choices)
