"""
Async driver — the core orchestrator.

This module is UI-agnostic. It yields typed GameEvent objects and never prints,
never writes to a socket, and has no Rich/FastAPI dependencies.

Consumers:
  CLI   → chessdemo/cli/display.py
  Web   → chessdemo/web/app.py WebSocket handler
  Tests → async for event in run_game(...): assert ...

Usage:
    session = DemoSession(config)
    async for event in run_autoplay(session):
        display_event(event)

Every per-ply delay and the restart countdown go through session.wait(),
which is where stop and reset requests take effect.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator

from chessdemo.board import ChessBoard, IllegalMoveError
from chessdemo.events import (
    Color,
    GameEvent,
    GameOverEvent,
    GameResult,
    GameStartEvent,
    MoveAppliedEvent,
    CheckEvent,
    RestartScheduledEvent,
)
from chessdemo.material import captured_pieces, eval_bar, material
from chessdemo.openings import opening_name
from chessdemo.players import create_player
from chessdemo.players.base import GameState, Player, PlayerError
from chessdemo.renderer import render_unicode
from chessdemo.session import DemoSession
from chessdemo.sounds import sound_for

logger = logging.getLogger("chessdemo.game")


async def run_game(
    session: DemoSession,
    white_player: Player,
    black_player: Player,
) -> AsyncGenerator[GameEvent, None]:
    """
    Play one game, yielding events for every significant action.

    The generator completes when the rules end the game, when the ply cap is
    hit, when a player fails, or when stop/reset is requested on the session.
    """
    demo = session.config.demo
    board = ChessBoard(demo.starting_fen)
    board.set_players(white_player.name, black_player.name)
    session.game_number += 1
    game_number = session.game_number

    logger.info(
        "Game %d: %s (White) vs %s (Black)",
        game_number, white_player.name, black_player.name,
    )
    yield GameStartEvent(
        game_number=game_number,
        white_personality=white_player.name,
        black_personality=black_player.name,
        starting_fen=board.fen(),
        board_unicode=render_unicode(board),
    )

    opening: str | None = None
    ply = 0

    while not board.game_over():
        if demo.max_plies and ply >= demo.max_plies:
            yield await _finish(session, board, "*", "max_plies", None)
            return

        if await session.wait(session.move_delay):
            yield await _finish(session, board, "*", "interrupted", None)
            return

        color = board.color_to_move
        player = white_player if color == "white" else black_player
        state = GameState(
            fen=board.fen(),
            legal_moves=board.moves(verbose=True),  # type: ignore[arg-type]
            move_history_san=board.history(),  # type: ignore[arg-type]
            color=color,
            move_number=board.fullmove_number,
        )

        try:
            chosen = await player.get_move(state)
            applied = board.move(chosen)
        except (PlayerError, IllegalMoveError) as exc:
            logger.warning("Game %d: %s failed to move: %s", game_number, player.name, exc)
            winner: Color = "black" if color == "white" else "white"
            result: GameResult = "0-1" if color == "white" else "1-0"
            yield await _finish(session, board, result, "player_error", winner, loser_name=player.name)
            return

        ply += 1
        history = board.history()
        opening = opening_name(history) or opening  # type: ignore[arg-type]
        mat = material(board)
        caps = captured_pieces(board)
        logger.debug("Game %d ply %d: %s %s", game_number, ply, color, applied.san)

        yield MoveAppliedEvent(
            color=color,
            move_san=applied.san,
            move_uci=applied.uci,
            from_square=applied.from_square,
            to_square=applied.to_square,
            piece=applied.piece,
            captured=applied.captured,
            promotion=applied.promotion,
            fen_after=board.fen(),
            board_unicode_after=render_unicode(board, applied),
            is_check=board.in_check(),
            move_number=state.move_number,
            ply=ply,
            history_san=list(history),  # type: ignore[arg-type]
            material_white=mat.white,
            material_black=mat.black,
            eval_white_pct=eval_bar(mat),
            captured_by_white=caps["white"],
            captured_by_black=caps["black"],
            opening=opening,
            sound=sound_for(applied, board),
        )

        # Announce check (if the game isn't already over)
        if board.in_check() and not board.game_over():
            yield CheckEvent(color_in_check=board.color_to_move, checking_move_san=applied.san)

    yield await _finish(
        session, board, board.result(), board.game_over_reason(), board.winner_color()
    )


async def run_autoplay(session: DemoSession) -> AsyncGenerator[GameEvent, None]:
    """
    Play games back to back until session.request_stop().

    Each game gets a fresh personality pair. After a finished game the driver
    announces and waits out the restart delay; a reset request skips the
    wait, and a reset during a game abandons it and starts the next one.
    """
    while not session.stopped:
        session.clear_reset()
        white_p, black_p = session.choose_personalities()
        white = create_player("heuristic", white_p, session.rng)
        black = create_player("heuristic", black_p, session.rng)

        async for event in run_game(session, white, black):
            yield event

        if session.stopped:
            break
        if session.reset_event.is_set():
            logger.info("Reset requested; starting a new game")
            continue

        delay = session.config.demo.restart_delay
        yield RestartScheduledEvent(delay_seconds=delay)
        await session.wait(delay)

    logger.info("Auto-play stopped after %d game(s)", session.game_number)


# --------------------------------------------------------------------------- #
# Helpers                                                                      #
# --------------------------------------------------------------------------- #

async def _finish(
    session: DemoSession,
    board: ChessBoard,
    result: GameResult,
    reason: str,
    winner: Color | None,
    loser_name: str | None = None,
) -> GameOverEvent:
    board.set_result(result)
    pgn = board.to_pgn()
    total_moves = len(board.history())
    logger.info(
        "Game %d over: %s (%s) after %d plies",
        session.game_number, result, reason, total_moves,
    )
    if session.config.demo.save_pgn:
        await _save_pgn(pgn, session.config.pgn_dir_path, session.game_number)
    return GameOverEvent(
        result=result,
        reason=reason,  # type: ignore[arg-type]
        winner_color=winner,
        status_text=status_text(reason, winner, loser_name),
        pgn=pgn,
        total_moves=total_moves,
    )


def status_text(reason: str, winner: Color | None, loser_name: str | None = None) -> str:
    """One-line status shown when a game ends."""
    match reason:
        case "checkmate":
            return f"Checkmate! {(winner or '').title()} Wins"
        case "stalemate" | "draw" | "threefold_repetition" | "fifty_move" | "insufficient_material":
            return "Draw"
        case "max_plies":
            return "Move limit reached"
        case "interrupted":
            return "Game stopped"
        case "player_error":
            return f"{loser_name or 'A player'} could not move"
        case _:
            return "Game Over"


async def _save_pgn(pgn: str, pgn_dir: Path, game_number: int) -> None:
    """Write PGN to a timestamped file, creating the directory if needed."""
    pgn_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    pgn_path = pgn_dir / f"game_{timestamp}_{game_number}.pgn"
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, lambda: pgn_path.write_text(pgn, encoding="utf-8")
    )
