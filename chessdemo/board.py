"""
Thin facade over python-chess Board and PGN machinery.

Exposes the small rules-engine contract the demo is written against
(reset, board, moves, move, turn, in_check, in_checkmate, in_draw,
in_stalemate, game_over, history, fen) without leaking python-chess
internals into the rest of the codebase.

Moves cross the facade as MoveRecord values: square names, piece letters
and SAN, the same shape a browser-side rules engine would hand out.
"""

from __future__ import annotations

import chess
import chess.pgn
from dataclasses import dataclass
from datetime import datetime

from chessdemo.events import Color, GameResult


class IllegalMoveError(ValueError):
    """Raised by ChessBoard.move() for unparseable or illegal input."""


@dataclass(frozen=True)
class MoveRecord:
    """One legal move, described the way the selector and UI consume it."""
    from_square: str           # e.g. "e2"
    to_square: str             # e.g. "e4"
    piece: str                 # moving piece: p n b r q k
    san: str                   # e.g. "Nf3+", "exd5", "O-O", "e8=Q#"
    uci: str                   # e.g. "e7e8q"
    color: Color
    captured: str | None = None
    promotion: str | None = None

    @property
    def is_castle(self) -> bool:
        return self.san.startswith("O-O")


@dataclass(frozen=True)
class Piece:
    type: str   # p n b r q k
    color: str  # "w" or "b"


def _color_name(color: chess.Color) -> Color:
    return "white" if color == chess.WHITE else "black"


class ChessBoard:
    """Facade over chess.Board + chess.pgn.Game."""

    def __init__(self, fen: str | None = None) -> None:
        self._starting_fen = fen
        self._board = chess.Board(fen) if fen else chess.Board()
        self._records: list[MoveRecord] = []
        self._new_pgn_game()

    def _new_pgn_game(self) -> None:
        self._game = chess.pgn.Game()
        if self._starting_fen:
            self._game.setup(self._board)
        self._node: chess.pgn.GameNode = self._game
        self._game.headers["Date"] = datetime.now().strftime("%Y.%m.%d")
        self._game.headers["Event"] = "ChessDemo auto-play"

    def reset(self) -> None:
        """Return to the starting position and forget the move history."""
        self._board = chess.Board(self._starting_fen) if self._starting_fen else chess.Board()
        self._records = []
        self._new_pgn_game()

    # ------------------------------------------------------------------ #
    # State queries                                                        #
    # ------------------------------------------------------------------ #

    @property
    def raw(self) -> chess.Board:
        """Underlying python-chess board, for renderers only."""
        return self._board

    @property
    def starting_fen(self) -> str:
        return self._starting_fen or chess.STARTING_FEN

    @property
    def color_to_move(self) -> Color:
        return _color_name(self._board.turn)

    @property
    def fullmove_number(self) -> int:
        return self._board.fullmove_number

    def fen(self) -> str:
        return self._board.fen()

    def turn(self) -> str:
        return "w" if self._board.turn == chess.WHITE else "b"

    def board(self) -> list[list[Piece | None]]:
        """8x8 grid, rank 8 first, file a first. Empty squares are None."""
        rows: list[list[Piece | None]] = []
        for rank in range(7, -1, -1):
            row: list[Piece | None] = []
            for file in range(8):
                p = self._board.piece_at(chess.square(file, rank))
                if p is None:
                    row.append(None)
                else:
                    row.append(Piece(type=p.symbol().lower(), color="w" if p.color else "b"))
            rows.append(row)
        return rows

    def moves(self, verbose: bool = False) -> list[str] | list[MoveRecord]:
        """Legal moves for the side to move, as SAN strings or MoveRecords."""
        if verbose:
            return [self._record(m) for m in self._board.legal_moves]
        return [self._board.san(m) for m in self._board.legal_moves]

    def in_check(self) -> bool:
        return self._board.is_check()

    def in_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def in_stalemate(self) -> bool:
        return self._board.is_stalemate()

    def in_draw(self) -> bool:
        # Claimable draws (threefold repetition, fifty-move) count as drawn:
        # nobody is around to claim them in unattended play.
        b = self._board
        return (
            b.is_stalemate()
            or b.is_insufficient_material()
            or b.is_seventyfive_moves()
            or b.is_fivefold_repetition()
            or b.can_claim_draw()
        )

    def game_over(self) -> bool:
        return self._board.is_game_over(claim_draw=True)

    def history(self, verbose: bool = False) -> list[str] | list[MoveRecord]:
        if verbose:
            return list(self._records)
        return [r.san for r in self._records]

    def last_move(self) -> MoveRecord | None:
        return self._records[-1] if self._records else None

    # ------------------------------------------------------------------ #
    # Move application                                                    #
    # ------------------------------------------------------------------ #

    def move(self, m: MoveRecord | str) -> MoveRecord:
        """
        Apply a move given as a MoveRecord, UCI string or SAN string.

        Returns the MoveRecord actually applied.

        Raises:
            IllegalMoveError: the move cannot be parsed or is not legal here.
        """
        parsed = self._parse(m.uci if isinstance(m, MoveRecord) else m)
        record = self._record(parsed)
        self._board.push(parsed)
        self._node = self._node.add_variation(parsed)
        self._records.append(record)
        return record

    def _parse(self, move_str: str) -> chess.Move:
        s = move_str.strip()

        # UCI: from_uci() validates syntax only; legality is a separate check.
        try:
            move = chess.Move.from_uci(s)
        except (ValueError, chess.InvalidMoveError):
            pass
        else:
            if move in self._board.legal_moves:
                return move
            raise IllegalMoveError(f"'{s}' is not legal in this position")

        # SAN: parse_san() is board-aware and raises specific subclasses.
        try:
            return self._board.parse_san(s)
        except chess.AmbiguousMoveError as exc:
            raise IllegalMoveError(f"'{s}' is ambiguous here") from exc
        except chess.IllegalMoveError as exc:
            raise IllegalMoveError(f"'{s}' is not legal in this position") from exc
        except (ValueError, chess.InvalidMoveError) as exc:
            raise IllegalMoveError(f"'{s}' is not a recognised move") from exc

    def _record(self, move: chess.Move) -> MoveRecord:
        b = self._board
        piece = b.piece_type_at(move.from_square)
        captured: str | None = None
        if b.is_en_passant(move):
            captured = "p"
        elif b.is_capture(move):
            captured = chess.piece_symbol(b.piece_type_at(move.to_square))
        return MoveRecord(
            from_square=chess.square_name(move.from_square),
            to_square=chess.square_name(move.to_square),
            piece=chess.piece_symbol(piece),
            san=b.san(move),
            uci=move.uci(),
            color=_color_name(b.turn),
            captured=captured,
            promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
        )

    # ------------------------------------------------------------------ #
    # Game-over info                                                      #
    # ------------------------------------------------------------------ #

    def game_over_reason(self) -> str:
        outcome = self._board.outcome(claim_draw=True)
        if outcome is None:
            return "unknown"
        match outcome.termination:
            case chess.Termination.CHECKMATE:
                return "checkmate"
            case chess.Termination.STALEMATE:
                return "stalemate"
            case chess.Termination.THREEFOLD_REPETITION | chess.Termination.FIVEFOLD_REPETITION:
                return "threefold_repetition"
            case chess.Termination.FIFTY_MOVES | chess.Termination.SEVENTYFIVE_MOVES:
                return "fifty_move"
            case chess.Termination.INSUFFICIENT_MATERIAL:
                return "insufficient_material"
            case _:
                return "draw"

    def result(self) -> GameResult:
        outcome = self._board.outcome(claim_draw=True)
        if outcome is None:
            return "*"
        return outcome.result()  # type: ignore[return-value]

    def winner_color(self) -> Color | None:
        outcome = self._board.outcome(claim_draw=True)
        if outcome is None or outcome.winner is None:
            return None
        return _color_name(outcome.winner)

    # ------------------------------------------------------------------ #
    # PGN                                                                 #
    # ------------------------------------------------------------------ #

    def set_players(self, white_name: str, black_name: str) -> None:
        self._game.headers["White"] = white_name
        self._game.headers["Black"] = black_name

    def set_result(self, result: str) -> None:
        self._game.headers["Result"] = result

    def to_pgn(self) -> str:
        exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=False)
        return self._game.accept(exporter)
