"""RandomPlayer — uniform choice over the legal moves."""

from __future__ import annotations

import random

from chessdemo.board import MoveRecord
from chessdemo.players.base import GameState, Player, PlayerError


class RandomPlayer(Player):
    def __init__(self, name: str = "random", rng: random.Random | None = None) -> None:
        super().__init__(name)
        self._rng = rng or random.Random()

    async def get_move(self, state: GameState) -> MoveRecord:
        if not state.legal_moves:
            raise PlayerError("no legal moves to choose from")
        return self._rng.choice(state.legal_moves)
