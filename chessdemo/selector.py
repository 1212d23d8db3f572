"""
Heuristic move selector.

One linear pass over the legal moves: each candidate gets a score from a few
weighted features plus a little noise, and one of the top-scoring moves is
returned at random. There is no lookahead and no position re-simulation.

Scoring, per candidate (weights come from the side's Personality):
  capture    +value(captured) * capture_weight, then -value(moving piece)
  promotion  +value(promoted to) * promotion_weight
  center     +center_weight when the destination is d4, d5, e4 or e5
  check      +check_weight when the SAN contains "+"
  noise      +uniform [0, 0.5)

The capture penalty is charged in full whether or not the destination is
defended. The check feature reads the SAN text instead of replaying the move.
"""

from __future__ import annotations

import random
from typing import Sequence

from chessdemo.board import MoveRecord
from chessdemo.events import Color
from chessdemo.personality import Personality

PIECE_VALUES: dict[str, int] = {
    "p": 1,
    "n": 3,
    "b": 3,
    "r": 5,
    "q": 9,
    "k": 0,
}

CENTER_SQUARES = frozenset({"d4", "d5", "e4", "e5"})

NOISE_MAX = 0.5


def score_move(move: MoveRecord, personality: Personality) -> float:
    """Deterministic part of a move's score (everything except the noise)."""
    score = 0.0

    if move.captured:
        score += PIECE_VALUES[move.captured] * personality.capture_weight
        score -= PIECE_VALUES[move.piece]

    if move.promotion:
        score += PIECE_VALUES[move.promotion] * personality.promotion_weight

    if move.to_square in CENTER_SQUARES:
        score += personality.center_weight

    if "+" in move.san:
        score += personality.check_weight

    return score


def select_move(
    legal_moves: Sequence[MoveRecord],
    personality: Personality,
    side_to_move: Color,
    rng: random.Random | None = None,
) -> MoveRecord:
    """
    Pick a move for side_to_move.

    legal_moves must be non-empty; the caller stops the game loop before
    this point when the game is over. side_to_move does not affect scoring.
    Pass rng for reproducible choices; the module-level random is used
    otherwise.
    """
    r = rng or random
    best_score = float("-inf")
    best_moves: list[MoveRecord] = []

    for move in legal_moves:
        score = score_move(move, personality) + r.random() * NOISE_MAX

        if score > best_score:
            best_score = score
            best_moves = [move]
        elif score == best_score:
            best_moves.append(move)

    return best_moves[r.randrange(len(best_moves))]
