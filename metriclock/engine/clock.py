"""
Simulation clock for metric time.

The clock decouples simulated time from wall-clock time. It never sleeps
and never reads the system clock: time moves only when the owner calls
tick() with the wall time that has passed.

Two modes are supported:

- RealTime: every tick advances the clock by delta * speed
- TurnBased: ticks consume the current turn; once the turn is used up
  the clock holds until advance_turn() is called

All durations are held as integer nanoseconds.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, Any

from metriclock.engine.codec import encode
from metriclock.engine.timestamp import (
    NANOS_PER_SECOND,
    SimulationDateTime,
    SimulationTimestamp,
    format_seconds,
    to_nanos,
)

if TYPE_CHECKING:
    from metriclock.config import ClockConfig

logger = logging.getLogger(__name__)

FIELD_NAMES = (
    "clock_time",
    "clock_mode",
    "clock_speed",
    "turn_duration",
    "turn_time_remaining",
)


class ClockMode(Enum):
    """Clock modes. Values are the stable serialized names."""

    TURN_BASED = "TurnBased"
    REAL_TIME = "RealTime"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def duration_to_data(nanos: int) -> dict[str, int]:
    """Encode nanoseconds as whole seconds plus a nanosecond remainder."""
    secs, rest = divmod(nanos, NANOS_PER_SECOND)
    return {"secs": secs, "nanos": rest}


def duration_from_data(data: Any, field: str) -> int:
    """Decode a {"secs", "nanos"} mapping back into nanoseconds."""
    if not isinstance(data, dict) or set(data) != {"secs", "nanos"}:
        raise ValueError(f"'{field}' must be a mapping with 'secs' and 'nanos'")

    secs, nanos = data["secs"], data["nanos"]
    if not _is_int(secs) or not _is_int(nanos):
        raise ValueError(f"'{field}' secs and nanos must be integers")

    if not 0 <= nanos < NANOS_PER_SECOND:
        raise ValueError(
            f"'{field}' nanos must be in [0, {NANOS_PER_SECOND}), got {nanos}"
        )

    return secs * NANOS_PER_SECOND + nanos


class SimulationClock:
    """
    A mutable simulated clock counting metric time since an epoch.

    Nothing here validates numeric input. Negative deltas, negative speeds
    and a zero turn duration are all accepted and produce whatever the
    arithmetic implies.
    """

    def __init__(self) -> None:
        self._clock_time: int = 0
        self._clock_mode: ClockMode = ClockMode.REAL_TIME
        self._clock_speed: float = 1.0
        self._turn_duration: int = 6 * NANOS_PER_SECOND
        self._turn_time_remaining: int = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_seconds(cls, epoch_seconds: int) -> SimulationClock:
        """
        Create a clock starting at `epoch_seconds`.

        Unlike the default constructor this clock starts stopped (speed
        0.0) with a three second turn.
        """
        clock = cls()
        clock._clock_time = epoch_seconds * NANOS_PER_SECOND
        clock._clock_speed = 0.0
        clock._turn_duration = 3 * NANOS_PER_SECOND
        return clock

    @classmethod
    def from_metric_timestamp(
        cls,
        year: int,
        month: int,
        week: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
    ) -> SimulationClock:
        """
        Create a default clock positioned at a metric date and time.
        """
        clock = cls()
        clock._clock_time = (
            encode(year, month, week, day, hour, minute, second) * NANOS_PER_SECOND
        )
        return clock

    @classmethod
    def from_config(cls, config: ClockConfig) -> SimulationClock:
        """
        Create a clock with every option spelled out explicitly.
        """
        clock = cls()
        clock._clock_time = config.epoch_seconds * NANOS_PER_SECOND
        clock._clock_speed = config.speed
        clock._turn_duration = to_nanos(config.turn_duration)

        if config.mode is ClockMode.TURN_BASED:
            clock.enable_turn_mode()

        return clock

    # ------------------------------------------------------------------
    # Reading the time
    # ------------------------------------------------------------------

    def current_timestamp(self) -> SimulationTimestamp:
        return SimulationTimestamp(self._clock_time)

    def current_datetime(self) -> SimulationDateTime:
        return SimulationDateTime.from_epoch_seconds(
            self._clock_time // NANOS_PER_SECOND
        )

    def current_epoch_seconds(self) -> float:
        return self._clock_time / NANOS_PER_SECOND

    @property
    def elapsed_ns(self) -> int:
        return self._clock_time

    @property
    def mode(self) -> ClockMode:
        return self._clock_mode

    @property
    def is_turn_based(self) -> bool:
        return self._clock_mode is ClockMode.TURN_BASED

    @property
    def turn_duration_ns(self) -> int:
        return self._turn_duration

    @property
    def turn_remaining_ns(self) -> int:
        return self._turn_time_remaining

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------

    @property
    def speed(self) -> float:
        return self._clock_speed

    def set_clock_speed(self, speed: float) -> None:
        """
        Set the multiplier applied to every tick.

        0.0 pauses the clock and values above 1.0 fast-forward. The sign is
        not checked: a negative speed makes ticks run the clock backwards.
        A NaN or infinite speed is stored, but the next tick raises
        ValueError or OverflowError since no duration can be scaled by it.
        """
        self._clock_speed = speed

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def set_turn_duration(self, duration: timedelta | int | float) -> None:
        """
        Reconfigure the length of a turn.

        A turn in progress keeps its remaining time, capped at the new
        duration.
        """
        self._turn_duration = to_nanos(duration)

        if self.is_turn_based:
            self._turn_time_remaining = min(
                self._turn_time_remaining, self._turn_duration
            )

    def enable_turn_mode(self) -> None:
        """
        Switch to turn-based mode and start a full turn.

        Does nothing if the clock is already turn-based.
        """
        if self._clock_mode is ClockMode.REAL_TIME:
            self._clock_mode = ClockMode.TURN_BASED
            self._turn_time_remaining = self._turn_duration
            logger.debug("Turn mode enabled at %s", self.current_datetime())

    def disable_turn_mode(self) -> None:
        """
        Return to real-time mode, discarding what is left of the turn.
        """
        if self._clock_mode is ClockMode.TURN_BASED:
            self._clock_mode = ClockMode.REAL_TIME
            self._turn_time_remaining = 0
            logger.debug("Turn mode disabled at %s", self.current_datetime())

    def turn_complete(self) -> bool:
        """
        True when no time is left in the current turn.

        In real-time mode there is never a turn in progress, so this is
        always True. Check the mode first if that matters.
        """
        return not self._turn_time_remaining

    def advance_turn(self) -> None:
        """
        Start the next turn.

        Only takes effect in turn-based mode once the current turn is
        fully used. A turn is never cut short.
        """
        if self._clock_mode is ClockMode.TURN_BASED and not self._turn_time_remaining:
            self._turn_time_remaining = self._turn_duration
            logger.debug("Turn advanced at %s", self.current_datetime())

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    def tick(self, delta: timedelta | int | float) -> None:
        """
        Advance simulated time by `delta` wall time scaled by the speed.

        The scaled delta is rounded to the nearest nanosecond. In
        turn-based mode a tick that overshoots the turn still advances
        the clock by the full scaled delta; only the remaining turn time
        stops at zero. With no turn time left the tick does nothing.
        """
        self.tick_ns(to_nanos(delta))

    def tick_ns(self, delta_ns: int) -> None:
        """Same as tick(), with the wall time given in nanoseconds."""
        delta = round(Fraction(delta_ns) * Fraction(self._clock_speed))

        if self._clock_mode is ClockMode.REAL_TIME:
            self._clock_time += delta
        elif self._turn_time_remaining:
            self._turn_time_remaining = max(0, self._turn_time_remaining - delta)
            self._clock_time += delta

    # ------------------------------------------------------------------
    # Plain data
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """
        Export the clock state as plain data under stable field names.
        """
        return {
            "clock_time": duration_to_data(self._clock_time),
            "clock_mode": self._clock_mode.value,
            "clock_speed": self._clock_speed,
            "turn_duration": duration_to_data(self._turn_duration),
            "turn_time_remaining": duration_to_data(self._turn_time_remaining),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationClock:
        """
        Rebuild a clock from the mapping produced by to_dict().

        The state is restored as given; invariants are not re-checked.
        """
        if not isinstance(data, dict):
            raise ValueError("Clock state must be a mapping (dict)")

        missing = [name for name in FIELD_NAMES if name not in data]
        if missing:
            raise ValueError(f"Clock state is missing fields: {', '.join(missing)}")

        try:
            mode = ClockMode(data["clock_mode"])
        except ValueError:
            raise ValueError(f"Unknown clock mode: {data['clock_mode']!r}") from None

        speed = data["clock_speed"]
        if isinstance(speed, bool) or not isinstance(speed, (int, float)):
            raise ValueError("'clock_speed' must be a number")

        clock = cls()
        clock._clock_time = duration_from_data(data["clock_time"], "clock_time")
        clock._clock_mode = mode
        clock._clock_speed = float(speed)
        clock._turn_duration = duration_from_data(data["turn_duration"], "turn_duration")
        clock._turn_time_remaining = duration_from_data(
            data["turn_time_remaining"], "turn_time_remaining"
        )
        return clock

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimulationClock):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            "SimulationClock("
            f"clock_epoch_seconds={format_seconds(self._clock_time)}, "
            f"clock_timestamp={self.current_timestamp()!r}, "
            f"clock_datetime={self.current_datetime()}, "
            f"clock_speed={self._clock_speed}, "
            f"clock_state={self._clock_mode.value}, "
            f"turn_time={format_seconds(self._turn_duration)}, "
            f"turn_remaining={format_seconds(self._turn_time_remaining)})"
        )
