"""Sound cue for an applied move. The browser turns cue names into audio."""

from __future__ import annotations

from chessdemo.board import ChessBoard, MoveRecord
from chessdemo.events import SoundCue


def sound_for(move: MoveRecord, board: ChessBoard) -> SoundCue:
    """
    Pick the cue for a move that has just been applied to board.

    Priority: game end > check > promote > capture > castle > move.
    """
    if board.game_over():
        return "game_end"
    if board.in_check():
        return "check"
    if move.promotion:
        return "promote"
    if move.captured:
        return "capture"
    if move.is_castle:
        return "castle"
    return "move"
