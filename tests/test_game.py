"""
Tests for the async driver: one game (run_game) and back-to-back games
(run_autoplay). Per-ply delays are overridden to zero so nothing sleeps.
"""

from __future__ import annotations

import random
import tempfile
import unittest
from pathlib import Path

from chessdemo.board import MoveRecord
from chessdemo.config import Config, DemoConfig
from chessdemo.events import (
    CheckEvent,
    GameOverEvent,
    GameStartEvent,
    MoveAppliedEvent,
    RestartScheduledEvent,
)
from chessdemo.game import run_autoplay, run_game, status_text
from chessdemo.personality import PERSONALITIES, Personality
from chessdemo.players import HeuristicPlayer, create_player
from chessdemo.players.base import GameState, Player, PlayerError
from chessdemo.session import DemoSession

STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


def make_session(**demo_kwargs) -> DemoSession:
    config = Config(demo=DemoConfig(**demo_kwargs))
    return DemoSession(config, rng=random.Random(2024), move_delay_override=0.0)


def heuristic(name: str, seed: int = 0) -> HeuristicPlayer:
    return HeuristicPlayer(PERSONALITIES[name], rng=random.Random(seed))


class BrokenPlayer(Player):
    async def get_move(self, state: GameState) -> MoveRecord:
        raise PlayerError("out of ideas")


class CheatingPlayer(Player):
    """Returns a move that is not in the legal list."""

    async def get_move(self, state: GameState) -> MoveRecord:
        return MoveRecord(
            from_square="e2", to_square="e5", piece="p", san="e5", uci="e2e5", color=state.color
        )


async def collect(gen) -> list:
    return [event async for event in gen]


class RunGameTests(unittest.IsolatedAsyncioTestCase):
    async def test_game_already_over_never_asks_for_a_move(self) -> None:
        session = make_session(starting_fen=STALEMATE_FEN)
        events = await collect(run_game(session, BrokenPlayer("w"), BrokenPlayer("b")))

        self.assertEqual([type(e) for e in events], [GameStartEvent, GameOverEvent])
        over = events[-1]
        self.assertEqual(over.reason, "stalemate")
        self.assertEqual(over.result, "1/2-1/2")
        self.assertEqual(over.status_text, "Draw")
        self.assertEqual(over.total_moves, 0)

    async def test_ply_cap_ends_game(self) -> None:
        session = make_session(max_plies=6)
        events = await collect(run_game(session, heuristic("balanced", 1), heuristic("aggressive", 2)))

        start = events[0]
        self.assertIsInstance(start, GameStartEvent)
        self.assertEqual(start.game_number, 1)
        self.assertEqual((start.white_personality, start.black_personality), ("balanced", "aggressive"))

        moves = [e for e in events if isinstance(e, MoveAppliedEvent)]
        self.assertEqual(len(moves), 6)
        self.assertEqual([m.ply for m in moves], [1, 2, 3, 4, 5, 6])
        self.assertEqual([m.color for m in moves], ["white", "black"] * 3)
        self.assertEqual([m.move_number for m in moves], [1, 1, 2, 2, 3, 3])
        self.assertEqual(moves[-1].history_san, [m.move_san for m in moves])
        for m in moves:
            self.assertGreaterEqual(m.eval_white_pct, 0)
            self.assertLessEqual(m.eval_white_pct, 100)
            self.assertEqual(m.is_check, "+" in m.move_san or "#" in m.move_san)

        over = events[-1]
        self.assertIsInstance(over, GameOverEvent)
        self.assertEqual(over.reason, "max_plies")
        self.assertEqual(over.result, "*")
        self.assertEqual(over.total_moves, 6)
        self.assertIn("[White \"balanced\"]", over.pgn)

    async def test_check_event_follows_checking_move(self) -> None:
        # After 1.e4 f5 the only check is Qh5+; exf5 is worth 9 to a normal
        # personality, so use one that only cares about checks.
        checker = HeuristicPlayer(
            Personality("checker", capture_weight=0, check_weight=100, center_weight=0, promotion_weight=0),
            rng=random.Random(0),
        )
        session = make_session(
            starting_fen="rnbqkbnr/ppppp1pp/8/5p2/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2",
            max_plies=1,
        )
        events = await collect(run_game(session, checker, heuristic("balanced")))
        kinds = [type(e) for e in events]
        self.assertEqual(kinds, [GameStartEvent, MoveAppliedEvent, CheckEvent, GameOverEvent])
        applied, check = events[1], events[2]
        self.assertTrue(applied.is_check)
        self.assertEqual(applied.sound, "check")
        self.assertEqual(check.color_in_check, "black")
        self.assertEqual(check.checking_move_san, applied.move_san)

    async def test_long_game_ends_cleanly(self) -> None:
        session = make_session(max_plies=600)
        events = await collect(run_game(session, heuristic("aggressive", 3), heuristic("aggressive", 4)))
        over = events[-1]
        self.assertIsInstance(over, GameOverEvent)
        self.assertIn(
            over.reason,
            {
                "checkmate", "stalemate", "threefold_repetition", "fifty_move",
                "insufficient_material", "draw", "max_plies",
            },
        )
        if over.reason == "checkmate":
            self.assertIn(over.status_text, ("Checkmate! White Wins", "Checkmate! Black Wins"))
        else:
            self.assertIsNone(over.winner_color)

    async def test_stop_interrupts_after_current_ply(self) -> None:
        session = make_session()
        events = []
        async for event in run_game(session, heuristic("balanced"), heuristic("balanced")):
            events.append(event)
            if isinstance(event, MoveAppliedEvent):
                session.request_stop()

        self.assertEqual(
            [type(e) for e in events], [GameStartEvent, MoveAppliedEvent, GameOverEvent]
        )
        self.assertEqual(events[-1].reason, "interrupted")
        self.assertEqual(events[-1].result, "*")

    async def test_player_error_forfeits(self) -> None:
        session = make_session()
        events = await collect(run_game(session, BrokenPlayer("w"), heuristic("balanced")))
        over = events[-1]
        self.assertEqual(over.reason, "player_error")
        self.assertEqual(over.winner_color, "black")
        self.assertEqual(over.result, "0-1")
        self.assertEqual(over.status_text, "w could not move")

    async def test_illegal_move_from_player_forfeits(self) -> None:
        session = make_session()
        events = await collect(run_game(session, CheatingPlayer("cheat"), heuristic("balanced")))
        self.assertEqual(events[-1].reason, "player_error")

    async def test_pgn_saved_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            session = make_session(starting_fen=STALEMATE_FEN, save_pgn=True, pgn_dir=tmp)
            await collect(run_game(session, heuristic("balanced"), heuristic("balanced")))
            files = list(Path(tmp).glob("game_*.pgn"))
            self.assertEqual(len(files), 1)
            self.assertIn("1/2-1/2", files[0].read_text(encoding="utf-8"))


class RunAutoplayTests(unittest.IsolatedAsyncioTestCase):
    async def test_restarts_until_stopped(self) -> None:
        session = make_session(starting_fen=STALEMATE_FEN, restart_delay=0.0)
        events = []
        async for event in run_autoplay(session):
            events.append(event)
            if isinstance(event, GameStartEvent) and event.game_number == 2:
                session.request_stop()

        self.assertEqual(
            [type(e) for e in events],
            [GameStartEvent, GameOverEvent, RestartScheduledEvent, GameStartEvent, GameOverEvent],
        )
        self.assertEqual(events[2].delay_seconds, 0.0)
        self.assertEqual(session.game_number, 2)

    async def test_reset_abandons_game_and_restarts_immediately(self) -> None:
        session = make_session(white_personality="positional", black_personality="cautious")
        events = []
        async for event in run_autoplay(session):
            events.append(event)
            if isinstance(event, MoveAppliedEvent) and session.game_number == 1:
                session.request_reset()
            if isinstance(event, GameStartEvent) and event.game_number == 2:
                session.request_stop()

        kinds = [type(e) for e in events]
        self.assertEqual(
            kinds,
            [GameStartEvent, MoveAppliedEvent, GameOverEvent, GameStartEvent, GameOverEvent],
        )
        self.assertEqual(events[2].reason, "interrupted")
        self.assertNotIn(RestartScheduledEvent, kinds)
        self.assertEqual(events[3].white_personality, "positional")
        self.assertEqual(events[3].black_personality, "cautious")


class StatusTextTests(unittest.TestCase):
    def test_messages(self) -> None:
        self.assertEqual(status_text("checkmate", "white"), "Checkmate! White Wins")
        self.assertEqual(status_text("checkmate", "black"), "Checkmate! Black Wins")
        self.assertEqual(status_text("fifty_move", None), "Draw")
        self.assertEqual(status_text("stalemate", None), "Draw")
        self.assertEqual(status_text("unknown", None), "Game Over")


class FactoryTests(unittest.TestCase):
    def test_create_player(self) -> None:
        p = create_player("heuristic", PERSONALITIES["tactician"])
        self.assertIsInstance(p, HeuristicPlayer)
        self.assertEqual(p.name, "tactician")
        self.assertEqual(create_player("random").name, "random")
        with self.assertRaises(ValueError):
            create_player("heuristic")
        with self.assertRaises(ValueError):
            create_player("stockfish")
