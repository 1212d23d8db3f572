"""
Board rendering.

SVG comes from python-chess. The Unicode grid mirrors what the
browser draws: figurine symbols, rank 8 on top, with the last move's squares
and a checked king marked.
"""

from __future__ import annotations

import chess
import chess.svg

from chessdemo.board import ChessBoard, MoveRecord

PIECE_SYMBOLS: dict[str, dict[str, str]] = {
    "w": {"p": "♙", "n": "♘", "b": "♗", "r": "♖", "q": "♕", "k": "♔"},
    "b": {"p": "♟", "n": "♞", "b": "♝", "r": "♜", "q": "♛", "k": "♚"},
}

_LAST_MOVE_FILL = "#cdd26a"
_CHECK_FILL = "#e06666"


def render_unicode(board: ChessBoard, last_move: MoveRecord | None = None) -> str:
    """
    Figurine board with coordinates.

    Squares of last_move are wrapped in [ ], the king in check in ( ).
    Empty squares show "·".
    """
    grid = board.board()
    highlight = {last_move.from_square, last_move.to_square} if last_move else set()
    checked_color = board.turn() if board.in_check() else None

    lines: list[str] = []
    for row_idx, row in enumerate(grid):
        rank = 8 - row_idx
        cells: list[str] = []
        for col, piece in enumerate(row):
            square = f"{chr(97 + col)}{rank}"
            glyph = PIECE_SYMBOLS[piece.color][piece.type] if piece else "·"
            if piece and piece.type == "k" and piece.color == checked_color:
                cells.append(f"({glyph})")
            elif square in highlight:
                cells.append(f"[{glyph}]")
            else:
                cells.append(f" {glyph} ")
        lines.append(f"{rank} " + "".join(cells))
    lines.append("   " + "  ".join("abcdefgh"))
    return "\n".join(lines)


def render_svg(board: ChessBoard, last_move: MoveRecord | None = None, size: int = 400) -> str:
    """SVG string of the board with the last move and a checked king highlighted."""
    raw = board.raw
    fill: dict[chess.Square, str] = {}
    lastmove: chess.Move | None = None
    if last_move is not None:
        lastmove = chess.Move.from_uci(last_move.uci)
        fill[lastmove.from_square] = _LAST_MOVE_FILL
        fill[lastmove.to_square] = _LAST_MOVE_FILL
    check_square = raw.king(raw.turn) if raw.is_check() else None
    if check_square is not None:
        fill[check_square] = _CHECK_FILL
    return chess.svg.board(board=raw, lastmove=lastmove, check=check_square, fill=fill, size=size)


def format_history(history_san: list[str]) -> str:
    """Numbered move list: "1. e4 e5 2. Nf3"."""
    parts: list[str] = []
    for i, san in enumerate(history_san):
        if i % 2 == 0:
            parts.append(f"{i // 2 + 1}. {san}")
        else:
            parts.append(san)
    return " ".join(parts)
