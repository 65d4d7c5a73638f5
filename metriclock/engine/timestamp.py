"""
Metric time value types.

Two views of the same instant:

- SimulationTimestamp: a flat duration since the simulation epoch
- SimulationDateTime: the seven-field metric breakdown of that duration

Both are immutable and hold no reference to the clock they came from.

Durations are kept as integer nanoseconds. Python ints have no upper
bound, so metric years far past what timedelta can hold stay exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from metriclock.engine.codec import MetricFields, decode, encode, is_canonical

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICROSECOND = 1_000


def to_nanos(value: timedelta | int | float) -> int:
    """
    Convert a timedelta or a number of seconds into integer nanoseconds.

    Float seconds are rounded to the nearest nanosecond.
    """
    if isinstance(value, timedelta):
        micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
        return micros * NANOS_PER_MICROSECOND
    if isinstance(value, int):
        return value * NANOS_PER_SECOND
    return round(value * NANOS_PER_SECOND)


def format_seconds(nanos: int) -> str:
    """
    Render nanoseconds as a decimal seconds count.

    Whole values print without a fractional part ("45"), others with
    trailing zeros dropped ("2.5").
    """
    sign = "-" if nanos < 0 else ""
    whole, fraction = divmod(abs(nanos), NANOS_PER_SECOND)
    if not fraction:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{fraction:09d}".rstrip("0")


@dataclass(frozen=True)
class SimulationTimestamp:
    """
    A fixed point in simulated time, stored as nanoseconds since epoch.
    """

    nanos: int = 0

    @classmethod
    def from_epoch_seconds(cls, epoch_seconds: int) -> SimulationTimestamp:
        return cls(epoch_seconds * NANOS_PER_SECOND)

    @classmethod
    def from_components(
        cls,
        year: int,
        month: int,
        week: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
    ) -> SimulationTimestamp:
        return cls.from_epoch_seconds(
            encode(year, month, week, day, hour, minute, second)
        )

    @classmethod
    def from_datetime(cls, date_time: SimulationDateTime) -> SimulationTimestamp:
        return date_time.to_timestamp()

    @classmethod
    def from_duration(cls, duration: timedelta | int | float) -> SimulationTimestamp:
        return cls(to_nanos(duration))

    @property
    def epoch_seconds(self) -> int:
        return self.nanos // NANOS_PER_SECOND

    def total_seconds(self) -> float:
        return self.nanos / NANOS_PER_SECOND

    def __str__(self) -> str:
        # "45", not Python's float rendering "45.0"
        return format_seconds(self.nanos)

    def __repr__(self) -> str:
        return f"SimulationTimestamp(epoch_seconds={self.epoch_seconds})"


@dataclass(frozen=True)
class SimulationDateTime:
    """
    Date and time of the simulation in metric units.

    Fields are stored exactly as given. from_components() performs no
    carrying, so only values produced by decoding are guaranteed to be
    canonical.
    """

    year: int = 0
    month: int = 0
    week: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_components(
        cls,
        year: int,
        month: int,
        week: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
    ) -> SimulationDateTime:
        return cls(year, month, week, day, hour, minute, second)

    @classmethod
    def from_epoch_seconds(cls, epoch_seconds: int) -> SimulationDateTime:
        return cls(*decode(epoch_seconds))

    @classmethod
    def from_timestamp(cls, timestamp: SimulationTimestamp) -> SimulationDateTime:
        return cls.from_epoch_seconds(timestamp.epoch_seconds)

    @classmethod
    def from_duration(cls, duration: timedelta | int | float) -> SimulationDateTime:
        return cls.from_epoch_seconds(to_nanos(duration) // NANOS_PER_SECOND)

    @property
    def fields(self) -> MetricFields:
        return MetricFields(
            self.year,
            self.month,
            self.week,
            self.day,
            self.hour,
            self.minute,
            self.second,
        )

    def is_canonical(self) -> bool:
        return is_canonical(self.fields)

    def to_epoch_seconds(self) -> int:
        return encode(*self.fields)

    def to_timestamp(self) -> SimulationTimestamp:
        return SimulationTimestamp.from_epoch_seconds(self.to_epoch_seconds())

    def __str__(self) -> str:
        # YYYY-MM-WW-DD@HH:MM:SS.ssss
        return (
            f"{self.year}-{self.month:02}-{self.week:02}-{self.day:02}"
            f"@{self.hour:02}:{self.minute:02}:{self.second:07.4f}"
        )
