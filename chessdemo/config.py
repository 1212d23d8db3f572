"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
Every section is optional; a missing key falls back to the default below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import chess
import yaml

from chessdemo.personality import Personality, all_personalities

SpeedName = Literal["normal", "fast", "slow"]

_SPEED_NAMES = ("normal", "fast", "slow")
_WEIGHT_KEYS = ("capture_weight", "check_weight", "center_weight", "promotion_weight")


@dataclass
class DemoConfig:
    speed: SpeedName = "normal"
    restart_delay: float = 3.0     # seconds between game over and the next game
    max_plies: int = 0             # 0 = play until the rules end the game
    starting_fen: str | None = None
    white_personality: str | None = None   # None = draw at random each game
    black_personality: str | None = None
    save_pgn: bool = False
    pgn_dir: str = "./games"
    seed: int | None = None


@dataclass
class Config:
    demo: DemoConfig = field(default_factory=DemoConfig)
    personalities: dict[str, Personality] = field(default_factory=dict)

    @property
    def pgn_dir_path(self) -> Path:
        return Path(self.demo.pgn_dir)

    def personality_pool(self) -> dict[str, Personality]:
        """Built-in personalities merged with the ones defined in config.yaml."""
        return all_personalities(self.personalities)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: fields are invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml to customise the demo."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Invalid config.yaml structure: top level must be a mapping")

    try:
        demo_raw = raw.get("demo") or {}
        seed = demo_raw.get("seed")
        demo_cfg = DemoConfig(
            speed=str(demo_raw.get("speed", "normal")).lower(),  # type: ignore[arg-type]
            restart_delay=float(demo_raw.get("restart_delay", 3.0)),
            max_plies=int(demo_raw.get("max_plies", 0)),
            starting_fen=demo_raw.get("starting_fen"),
            white_personality=demo_raw.get("white_personality"),
            black_personality=demo_raw.get("black_personality"),
            save_pgn=bool(demo_raw.get("save_pgn", False)),
            pgn_dir=str(demo_raw.get("pgn_dir", "./games")),
            seed=int(seed) if seed is not None else None,
        )

        personalities: dict[str, Personality] = {}
        for name, p_raw in (raw.get("personalities") or {}).items():
            personalities[str(name)] = _parse_personality(str(name), p_raw)

        config = Config(demo=demo_cfg, personalities=personalities)
        _validate(config)
        return config

    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc


def _parse_personality(name: str, p_raw: object) -> Personality:
    if not isinstance(p_raw, dict):
        raise ValueError(f"personalities.{name} must be a mapping of weights")
    missing = [k for k in _WEIGHT_KEYS if k not in p_raw]
    if missing:
        raise ValueError(f"personalities.{name} is missing {', '.join(missing)}")
    return Personality(
        name=name,
        capture_weight=float(p_raw["capture_weight"]),
        check_weight=float(p_raw["check_weight"]),
        center_weight=float(p_raw["center_weight"]),
        promotion_weight=float(p_raw["promotion_weight"]),
        description=str(p_raw.get("description", "")),
    )


def _validate(config: Config) -> None:
    demo = config.demo
    if demo.speed not in _SPEED_NAMES:
        raise ValueError(f"demo.speed must be one of {_SPEED_NAMES}, got '{demo.speed}'")
    if demo.restart_delay < 0:
        raise ValueError("demo.restart_delay must be >= 0")
    if demo.max_plies < 0:
        raise ValueError("demo.max_plies must be >= 0")
    if demo.starting_fen:
        try:
            chess.Board(demo.starting_fen)
        except ValueError as exc:
            raise ValueError(f"demo.starting_fen is invalid: {exc}") from exc

    pool = config.personality_pool()
    for key in ("white_personality", "black_personality"):
        pinned = getattr(demo, key)
        if pinned is not None and pinned not in pool:
            raise ValueError(
                f"demo.{key} '{pinned}' is not a known personality "
                f"(known: {', '.join(sorted(pool))})"
            )
