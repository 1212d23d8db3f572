"""
Abstract Player interface and the GameState snapshot passed to each player per turn.

GameState carries what a scripted player needs to choose a move. The game
loop builds it from the board facade; players never touch the board.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from chessdemo.board import MoveRecord
from chessdemo.events import Color


class PlayerError(Exception):
    """A player could not produce a move. Ends the game instead of crashing the demo."""


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the game at the start of a player's turn."""

    fen: str
    legal_moves: list[MoveRecord]
    move_history_san: list[str]
    color: Color
    move_number: int


class Player(ABC):
    """Abstract base class for all demo players."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def get_move(self, state: GameState) -> MoveRecord:
        """
        Return one of state.legal_moves.

        The game loop only calls this while the game is running, so
        state.legal_moves is never empty. Raise PlayerError if no move
        can be produced.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
