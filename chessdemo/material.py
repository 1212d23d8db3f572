"""
Material count, captured pieces and the evaluation bar.

The evaluation bar is purely cosmetic: a plain material count, no search.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessdemo.board import ChessBoard
from chessdemo.selector import PIECE_VALUES

# Standard starting set per side, used to derive captured pieces.
_STARTING_COUNTS: dict[str, int] = {"p": 8, "n": 2, "b": 2, "r": 2, "q": 1, "k": 1}

# Display order for captured-piece trays: most valuable first.
_TRAY_ORDER = "qrbnp"

EVAL_POINTS_PER_PAWN = 5.0


@dataclass(frozen=True)
class Material:
    white: int
    black: int

    @property
    def balance(self) -> int:
        """Positive when white is ahead."""
        return self.white - self.black


def material(board: ChessBoard) -> Material:
    w = 0
    b = 0
    for row in board.board():
        for piece in row:
            if piece is None:
                continue
            if piece.color == "w":
                w += PIECE_VALUES[piece.type]
            else:
                b += PIECE_VALUES[piece.type]
    return Material(white=w, black=b)


def eval_bar(m: Material) -> float:
    """White's share of the evaluation bar in percent, clamped to [0, 100]."""
    pct = 50.0 + EVAL_POINTS_PER_PAWN * m.balance
    return max(0.0, min(100.0, pct))


def captured_pieces(board: ChessBoard) -> dict[str, list[str]]:
    """
    Pieces each side has taken, keyed "white"/"black".

    Derived from what is missing compared to the starting set, so a promoted
    pawn can hide an earlier loss; counts never go negative.
    """
    counts = {"w": dict.fromkeys(_STARTING_COUNTS, 0), "b": dict.fromkeys(_STARTING_COUNTS, 0)}
    for row in board.board():
        for piece in row:
            if piece is not None:
                counts[piece.color][piece.type] += 1

    def missing(color: str) -> list[str]:
        out: list[str] = []
        for t in _TRAY_ORDER:
            lost = max(0, _STARTING_COUNTS[t] - counts[color][t])
            out.extend([t] * lost)
        return out

    # White has captured whatever black is missing, and vice versa.
    return {"white": missing("b"), "black": missing("w")}
