"""
Frame-driven loop for a SimulationClock.

A game or simulation host calls tick() once per frame with the wall time
that passed since the last frame. ClockRunner plays the host's part with
a fixed frame delta, so a clock can be driven deterministically for a
given stretch of wall time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta

from metriclock.engine.clock import SimulationClock
from metriclock.engine.timestamp import format_seconds, to_nanos

logger = logging.getLogger(__name__)

TurnCallback = Callable[[SimulationClock], None]


class ClockRunner:
    """
    Ticks a clock at a fixed frame rate.
    """

    def __init__(
        self,
        clock: SimulationClock,
        frame_delta: timedelta | float = 1 / 60,
        on_turn_complete: TurnCallback | None = None,
    ) -> None:
        self.clock = clock
        self.frame_delta_ns = to_nanos(frame_delta)
        self.on_turn_complete = on_turn_complete
        self.frames = 0
        self.turns_completed = 0

        if self.frame_delta_ns <= 0:
            raise ValueError(
                f"Frame delta must be positive, got {format_seconds(self.frame_delta_ns)}"
            )

    def step(self, auto_advance: bool = True) -> None:
        """
        Run a single frame.

        In turn mode, a turn that runs out during this frame is reported
        to on_turn_complete and, with auto_advance, the next one begins.
        """
        clock = self.clock
        had_turn_time = clock.is_turn_based and not clock.turn_complete()

        clock.tick_ns(self.frame_delta_ns)
        self.frames += 1

        if clock.is_turn_based and clock.turn_complete():
            if had_turn_time:
                self.turns_completed += 1
                if self.on_turn_complete is not None:
                    self.on_turn_complete(clock)
            if auto_advance:
                clock.advance_turn()

    def run_for(self, wall_seconds: timedelta | float, auto_advance: bool = True) -> int:
        """
        Run frames until `wall_seconds` of wall time have been fed in.

        Returns the number of frames run by this call.
        """
        target = to_nanos(wall_seconds)
        fed = 0
        start = self.frames

        while fed < target:
            self.step(auto_advance)
            fed += self.frame_delta_ns

        logger.debug(
            "Ran %d frames, clock at %s", self.frames - start, self.clock.current_datetime()
        )
        return self.frames - start
