"""
Opening names from the SAN move history.

A small hand-written book, not an ECO database. The name shown is the
longest book line the game starts with; check marks in the game's SAN are
ignored when matching.
"""

from __future__ import annotations

from typing import Sequence

_BOOK: tuple[tuple[str, str], ...] = (
    ("King's Pawn Opening", "e4"),
    ("Open Game", "e4 e5"),
    ("King's Knight Opening", "e4 e5 Nf3"),
    ("Ruy Lopez", "e4 e5 Nf3 Nc6 Bb5"),
    ("Ruy Lopez: Morphy Defense", "e4 e5 Nf3 Nc6 Bb5 a6"),
    ("Ruy Lopez: Berlin Defense", "e4 e5 Nf3 Nc6 Bb5 Nf6"),
    ("Italian Game", "e4 e5 Nf3 Nc6 Bc4"),
    ("Giuoco Piano", "e4 e5 Nf3 Nc6 Bc4 Bc5"),
    ("Two Knights Defense", "e4 e5 Nf3 Nc6 Bc4 Nf6"),
    ("Scotch Game", "e4 e5 Nf3 Nc6 d4"),
    ("Four Knights Game", "e4 e5 Nf3 Nc6 Nc3 Nf6"),
    ("Petrov's Defense", "e4 e5 Nf3 Nf6"),
    ("Philidor Defense", "e4 e5 Nf3 d6"),
    ("King's Gambit", "e4 e5 f4"),
    ("Vienna Game", "e4 e5 Nc3"),
    ("Bishop's Opening", "e4 e5 Bc4"),
    ("Sicilian Defense", "e4 c5"),
    ("Sicilian Defense: Open", "e4 c5 Nf3 d6 d4"),
    ("Sicilian Defense: Najdorf", "e4 c5 Nf3 d6 d4 cxd4 Nxd4 Nf6 Nc3 a6"),
    ("Sicilian Defense: Dragon", "e4 c5 Nf3 d6 d4 cxd4 Nxd4 Nf6 Nc3 g6"),
    ("Sicilian Defense: Closed", "e4 c5 Nc3"),
    ("French Defense", "e4 e6"),
    ("French Defense: Advance", "e4 e6 d4 d5 e5"),
    ("Caro-Kann Defense", "e4 c6"),
    ("Pirc Defense", "e4 d6 d4 Nf6"),
    ("Scandinavian Defense", "e4 d5"),
    ("Alekhine's Defense", "e4 Nf6"),
    ("Modern Defense", "e4 g6"),
    ("Queen's Pawn Opening", "d4"),
    ("Queen's Pawn Game", "d4 d5"),
    ("Queen's Gambit", "d4 d5 c4"),
    ("Queen's Gambit Accepted", "d4 d5 c4 dxc4"),
    ("Queen's Gambit Declined", "d4 d5 c4 e6"),
    ("Slav Defense", "d4 d5 c4 c6"),
    ("London System", "d4 d5 Bf4"),
    ("Indian Defense", "d4 Nf6"),
    ("King's Indian Defense", "d4 Nf6 c4 g6"),
    ("Nimzo-Indian Defense", "d4 Nf6 c4 e6 Nc3 Bb4"),
    ("Queen's Indian Defense", "d4 Nf6 c4 e6 Nf3 b6"),
    ("Grünfeld Defense", "d4 Nf6 c4 g6 Nc3 d5"),
    ("Benoni Defense", "d4 Nf6 c4 c5"),
    ("Dutch Defense", "d4 f5"),
    ("English Opening", "c4"),
    ("Réti Opening", "Nf3"),
    ("Bird's Opening", "f4"),
    ("Van 't Kruijs Opening", "e3"),
    ("Nimzo-Larsen Attack", "b3"),
    ("Polish Opening", "b4"),
    ("Grob Opening", "g4"),
    ("Hungarian Opening", "g3"),
    ("Saragossa Opening", "c3"),
    ("Mieses Opening", "d3"),
    ("Sodium Attack", "Na3"),
    ("Van Geet Opening", "Nc3"),
    ("Amar Opening", "Nh3"),
    ("Clemenz Opening", "h3"),
    ("Desprez Opening", "h4"),
    ("Ware Opening", "a4"),
    ("Anderssen's Opening", "a3"),
    ("Barnes Opening", "f3"),
)

_LINES: tuple[tuple[tuple[str, ...], str], ...] = tuple(
    (tuple(line.split()), name) for name, line in _BOOK
)


def _strip_annotations(san: str) -> str:
    return san.rstrip("+#!?")


def opening_name(history_san: Sequence[str]) -> str | None:
    """Name of the longest book line that prefixes history_san, or None."""
    played = tuple(_strip_annotations(s) for s in history_san)
    best: str | None = None
    best_len = 0
    for line, name in _LINES:
        n = len(line)
        if n > best_len and played[:n] == line:
            best = name
            best_len = n
    return best
