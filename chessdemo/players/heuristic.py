"""HeuristicPlayer — the selector bound to one personality for a whole game."""

from __future__ import annotations

import random

from chessdemo.board import MoveRecord
from chessdemo.personality import Personality
from chessdemo.players.base import GameState, Player
from chessdemo.selector import select_move


class HeuristicPlayer(Player):
    def __init__(self, personality: Personality, rng: random.Random | None = None) -> None:
        super().__init__(personality.name)
        self.personality = personality
        self._rng = rng

    async def get_move(self, state: GameState) -> MoveRecord:
        return select_move(state.legal_moves, self.personality, state.color, self._rng)
