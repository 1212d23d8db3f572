import unittest

from chessdemo.board import ChessBoard, IllegalMoveError, MoveRecord, Piece

STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


def play(board: ChessBoard, *sans: str) -> None:
    for san in sans:
        board.move(san)


class ChessBoardTests(unittest.TestCase):
    def test_starting_position(self) -> None:
        board = ChessBoard()
        self.assertEqual(len(board.moves()), 20)
        self.assertEqual(board.turn(), "w")
        self.assertEqual(board.color_to_move, "white")
        self.assertFalse(board.game_over())
        grid = board.board()
        self.assertEqual(len(grid), 8)
        self.assertEqual(grid[0][0], Piece(type="r", color="b"))
        self.assertEqual(grid[7][4], Piece(type="k", color="w"))
        self.assertIsNone(grid[4][4])

    def test_verbose_moves_are_records(self) -> None:
        records = ChessBoard().moves(verbose=True)
        self.assertTrue(all(isinstance(r, MoveRecord) for r in records))
        e4 = next(r for r in records if r.san == "e4")
        self.assertEqual((e4.from_square, e4.to_square, e4.piece), ("e2", "e4", "p"))
        self.assertIsNone(e4.captured)
        self.assertEqual(e4.color, "white")

    def test_move_accepts_record_uci_and_san(self) -> None:
        board = ChessBoard()
        record = next(r for r in board.moves(verbose=True) if r.uci == "e2e4")
        board.move(record)
        board.move("e7e5")
        applied = board.move("Nf3")
        self.assertEqual(applied.uci, "g1f3")
        self.assertEqual(board.history(), ["e4", "e5", "Nf3"])
        self.assertEqual([r.uci for r in board.history(verbose=True)], ["e2e4", "e7e5", "g1f3"])
        self.assertEqual(board.turn(), "b")

    def test_illegal_and_garbage_moves_raise(self) -> None:
        board = ChessBoard()
        with self.assertRaises(IllegalMoveError):
            board.move("e2e5")
        with self.assertRaises(IllegalMoveError):
            board.move("Qh5")
        with self.assertRaises(IllegalMoveError):
            board.move("not-a-move")
        self.assertEqual(board.history(), [])

    def test_capture_records_captured_piece(self) -> None:
        board = ChessBoard()
        play(board, "e4", "d5")
        capture = next(r for r in board.moves(verbose=True) if r.san == "exd5")
        self.assertEqual(capture.captured, "p")

    def test_en_passant_counts_as_pawn_capture(self) -> None:
        board = ChessBoard()
        play(board, "e4", "a6", "e5", "d5")
        ep = next(r for r in board.moves(verbose=True) if r.san == "exd6")
        self.assertEqual(ep.captured, "p")
        self.assertEqual(ep.to_square, "d6")

    def test_promotion_records(self) -> None:
        board = ChessBoard("8/P6k/8/8/8/8/8/K7 w - - 0 1")
        promos = {r.promotion for r in board.moves(verbose=True) if r.from_square == "a7"}
        self.assertEqual(promos, {"q", "r", "b", "n"})

    def test_castle_record(self) -> None:
        board = ChessBoard("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        castle = next(r for r in board.moves(verbose=True) if r.san == "O-O")
        self.assertTrue(castle.is_castle)
        self.assertEqual(castle.piece, "k")

    def test_checkmate(self) -> None:
        board = ChessBoard()
        play(board, "f3", "e5", "g4", "Qh4#")
        self.assertTrue(board.in_check())
        self.assertTrue(board.in_checkmate())
        self.assertTrue(board.game_over())
        self.assertFalse(board.in_draw())
        self.assertEqual(board.result(), "0-1")
        self.assertEqual(board.winner_color(), "black")
        self.assertEqual(board.game_over_reason(), "checkmate")
        self.assertEqual(board.moves(), [])

    def test_stalemate(self) -> None:
        board = ChessBoard(STALEMATE_FEN)
        self.assertTrue(board.in_stalemate())
        self.assertTrue(board.in_draw())
        self.assertTrue(board.game_over())
        self.assertFalse(board.in_check())
        self.assertEqual(board.game_over_reason(), "stalemate")
        self.assertEqual(board.result(), "1/2-1/2")
        self.assertIsNone(board.winner_color())

    def test_insufficient_material_is_a_draw(self) -> None:
        board = ChessBoard("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        self.assertTrue(board.in_draw())
        self.assertEqual(board.game_over_reason(), "insufficient_material")

    def test_reset_restores_start(self) -> None:
        board = ChessBoard()
        play(board, "e4", "e5")
        board.reset()
        self.assertEqual(board.history(), [])
        self.assertEqual(board.fen(), board.starting_fen)
        self.assertIsNone(board.last_move())

    def test_pgn_export(self) -> None:
        board = ChessBoard()
        board.set_players("balanced", "aggressive")
        play(board, "e4", "e5")
        board.set_result("*")
        pgn = board.to_pgn()
        self.assertIn('[White "balanced"]', pgn)
        self.assertIn("1. e4 e5", pgn)
