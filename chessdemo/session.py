"""
DemoSession — everything the auto-play driver needs, in one owned object.

The driver reads the move delay, the personalities and the cancellation
state from here instead of from module globals. Front ends hold the session
and poke it (request_reset, request_stop, cycle_speed); the driver notices
at its next wait.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass

from chessdemo.config import Config
from chessdemo.personality import Personality, get_personality, random_pair


@dataclass(frozen=True)
class SpeedSetting:
    name: str
    label: str
    delay_ms: int

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


# Cycle order for the speed button: Normal -> Fast -> Slow -> Normal.
SPEEDS: tuple[SpeedSetting, ...] = (
    SpeedSetting("normal", "Speed: Normal", 800),
    SpeedSetting("fast", "Speed: Fast", 200),
    SpeedSetting("slow", "Speed: Slow", 2000),
)


def speed_by_name(name: str) -> SpeedSetting:
    for s in SPEEDS:
        if s.name == name:
            return s
    raise ValueError(f"Unknown speed '{name}'")


class DemoSession:
    """Mutable state of one running demo; owned by whichever front end started it."""

    def __init__(
        self,
        config: Config,
        *,
        rng: random.Random | None = None,
        move_delay_override: float | None = None,
    ) -> None:
        self.config = config
        self.rng = rng or random.Random(config.demo.seed)
        self.speed = speed_by_name(config.demo.speed)
        # Tests set this to skip the real per-ply delay.
        self.move_delay_override = move_delay_override
        self.game_number = 0
        self.stop_event = asyncio.Event()
        self.reset_event = asyncio.Event()

    # ------------------------------------------------------------------ #
    # Controls                                                             #
    # ------------------------------------------------------------------ #

    @property
    def move_delay(self) -> float:
        if self.move_delay_override is not None:
            return self.move_delay_override
        return self.speed.delay_seconds

    def cycle_speed(self) -> SpeedSetting:
        idx = SPEEDS.index(self.speed)
        self.speed = SPEEDS[(idx + 1) % len(SPEEDS)]
        return self.speed

    def request_reset(self) -> None:
        """Abandon the current game (or restart countdown) and start a new one."""
        self.reset_event.set()

    def request_stop(self) -> None:
        self.stop_event.set()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    @property
    def interrupted(self) -> bool:
        return self.stop_event.is_set() or self.reset_event.is_set()

    def clear_reset(self) -> None:
        self.reset_event.clear()

    # ------------------------------------------------------------------ #
    # Scheduling                                                           #
    # ------------------------------------------------------------------ #

    async def wait(self, seconds: float) -> bool:
        """
        Sleep for up to `seconds`, waking early on stop or reset.

        Returns True if the wait was cut short (or a request was already
        pending), False if the full delay elapsed.
        """
        if self.interrupted:
            return True
        stop = asyncio.create_task(self.stop_event.wait())
        reset = asyncio.create_task(self.reset_event.wait())
        try:
            done, _ = await asyncio.wait(
                {stop, reset}, timeout=max(0.0, seconds), return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (stop, reset):
                task.cancel()
        return bool(done)

    # ------------------------------------------------------------------ #
    # Personalities                                                        #
    # ------------------------------------------------------------------ #

    def choose_personalities(self) -> tuple[Personality, Personality]:
        """
        Personalities for the next game.

        Pinned names from config win; unpinned sides get a fresh uniform draw.
        """
        pool = self.config.personality_pool()
        white, black = random_pair(pool, self.rng)
        demo = self.config.demo
        if demo.white_personality:
            white = get_personality(demo.white_personality, self.config.personalities)
        if demo.black_personality:
            black = get_personality(demo.black_personality, self.config.personalities)
        return white, black
