import tempfile
import textwrap
import unittest
from pathlib import Path

from chessdemo.config import Config, DemoConfig, load_config


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def _write(self, text: str) -> Path:
        path = self.dir / "config.yaml"
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(self.dir / "nope.yaml")

    def test_empty_file_gives_defaults(self) -> None:
        config = load_config(self._write(""))
        self.assertEqual(config.demo, DemoConfig())
        self.assertEqual(config.personalities, {})
        self.assertIn("balanced", config.personality_pool())

    def test_full_config(self) -> None:
        config = load_config(self._write("""
            demo:
              speed: fast
              restart_delay: 1.5
              max_plies: 200
              white_personality: berserker
              save_pgn: true
              pgn_dir: ./out
              seed: 42
            personalities:
              berserker:
                capture_weight: 20
                check_weight: 5
                center_weight: 0
                promotion_weight: 5
                description: Takes everything.
        """))
        self.assertEqual(config.demo.speed, "fast")
        self.assertEqual(config.demo.restart_delay, 1.5)
        self.assertEqual(config.demo.max_plies, 200)
        self.assertEqual(config.demo.white_personality, "berserker")
        self.assertIsNone(config.demo.black_personality)
        self.assertTrue(config.demo.save_pgn)
        self.assertEqual(config.pgn_dir_path, Path("./out"))
        self.assertEqual(config.demo.seed, 42)
        berserker = config.personality_pool()["berserker"]
        self.assertEqual(berserker.capture_weight, 20.0)
        self.assertEqual(berserker.description, "Takes everything.")

    def test_config_can_override_builtin_personality(self) -> None:
        config = load_config(self._write("""
            personalities:
              balanced: {capture_weight: 1, check_weight: 1, center_weight: 1, promotion_weight: 1}
        """))
        self.assertEqual(config.personality_pool()["balanced"].capture_weight, 1.0)

    def test_invalid_values_raise_value_error(self) -> None:
        cases = {
            "bad speed": "demo: {speed: warp}",
            "negative delay": "demo: {restart_delay: -1}",
            "negative plies": "demo: {max_plies: -5}",
            "bad starting fen": "demo: {starting_fen: 'not a fen'}",
            "unknown pinned": "demo: {black_personality: ghost}",
            "missing weight": "personalities: {x: {capture_weight: 1}}",
            "weights not a mapping": "personalities: {x: 3}",
            "not a mapping": "- just\n- a list\n",
        }
        for label, text in cases.items():
            with self.subTest(label):
                with self.assertRaises(ValueError):
                    load_config(self._write(text))

    def test_valid_starting_fen_is_kept(self) -> None:
        fen = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
        config = load_config(self._write(f"demo: {{starting_fen: '{fen}'}}"))
        self.assertEqual(config.demo.starting_fen, fen)

    def test_default_config_object(self) -> None:
        config = Config()
        self.assertEqual(config.demo.speed, "normal")
        self.assertEqual(config.demo.restart_delay, 3.0)
        self.assertFalse(config.demo.save_pgn)
