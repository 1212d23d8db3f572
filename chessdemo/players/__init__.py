"""
Player factory.

create_player() is the single entry point for instantiating any Player.

To add a new player type:
  1. Create chessdemo/players/<kind>.py implementing Player
  2. Add its case here
"""

from __future__ import annotations

import random

from chessdemo.personality import Personality
from chessdemo.players.base import GameState, Player, PlayerError
from chessdemo.players.heuristic import HeuristicPlayer
from chessdemo.players.random_player import RandomPlayer

__all__ = [
    "Player",
    "PlayerError",
    "GameState",
    "HeuristicPlayer",
    "RandomPlayer",
    "create_player",
]


def create_player(
    kind: str,
    personality: Personality | None = None,
    rng: random.Random | None = None,
) -> Player:
    """
    Instantiate the correct Player.

    "heuristic" needs a personality; "random" ignores it.
    """
    match kind:
        case "heuristic":
            if personality is None:
                raise ValueError("HeuristicPlayer requires a personality")
            return HeuristicPlayer(personality, rng=rng)
        case "random":
            return RandomPlayer(rng=rng)
        case _:
            raise ValueError(f"Unknown player kind '{kind}'")
