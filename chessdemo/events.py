"""
Typed event dataclasses — the shared language between the driver and any consumer.

The driver (game.py) yields these. The CLI, the WebSocket handler or a test
consumes them. All events are frozen so they're safe to pass across async
boundaries and can be serialized to JSON via dataclasses.asdict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Color = Literal["white", "black"]
GameResult = Literal["1-0", "0-1", "1/2-1/2", "*"]
GameOverReason = Literal[
    "checkmate",
    "stalemate",
    "draw",
    "threefold_repetition",
    "fifty_move",
    "insufficient_material",
    "max_plies",
    "player_error",
    "interrupted",
    "unknown",
]
SoundCue = Literal["move", "capture", "castle", "promote", "check", "game_end"]


@dataclass(frozen=True)
class GameStartEvent:
    game_number: int
    white_personality: str
    black_personality: str
    starting_fen: str
    board_unicode: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class MoveAppliedEvent:
    color: Color
    move_san: str
    move_uci: str
    from_square: str
    to_square: str
    piece: str
    captured: str | None
    promotion: str | None
    fen_after: str
    board_unicode_after: str
    is_check: bool
    move_number: int
    ply: int
    history_san: list[str]
    material_white: int
    material_black: int
    eval_white_pct: float            # evaluation bar: white's share, 0-100
    captured_by_white: list[str]     # black pieces white has taken
    captured_by_black: list[str]
    opening: str | None
    sound: SoundCue


@dataclass(frozen=True)
class CheckEvent:
    color_in_check: Color
    checking_move_san: str


@dataclass(frozen=True)
class SpeedChangedEvent:
    label: str
    delay_ms: int


@dataclass(frozen=True)
class GameOverEvent:
    result: GameResult
    reason: GameOverReason
    winner_color: Color | None
    status_text: str                 # e.g. "Checkmate! White Wins"
    pgn: str
    total_moves: int
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class RestartScheduledEvent:
    delay_seconds: float


# Union type for type-safe pattern matching in consumers
GameEvent = (
    GameStartEvent
    | MoveAppliedEvent
    | CheckEvent
    | SpeedChangedEvent
    | GameOverEvent
    | RestartScheduledEvent
)
