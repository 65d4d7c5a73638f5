"""
Mixed-radix codec for metric time.

Metric time counts seconds in fixed place values: 100 seconds to the
minute, 100 minutes to the hour, then tens all the way up to the year.

    | unit   | seconds     |
    |--------|-------------|
    | year   | 100,000,000 |
    | month  | 10,000,000  |
    | week   | 1,000,000   |
    | day    | 100,000     |
    | hour   | 10,000      |
    | minute | 100         |
    | second | 1           |

The codec knows nothing about clocks. It turns seven fields into a flat
second count and back again.
"""

from typing import NamedTuple

SECONDS_PER_YEAR = 100_000_000
SECONDS_PER_MONTH = 10_000_000
SECONDS_PER_WEEK = 1_000_000
SECONDS_PER_DAY = 100_000
SECONDS_PER_HOUR = 10_000
SECONDS_PER_MINUTE = 100
SECONDS_PER_SECOND = 1

# Most significant unit first
RADIX: tuple[tuple[str, int], ...] = (
    ("year", SECONDS_PER_YEAR),
    ("month", SECONDS_PER_MONTH),
    ("week", SECONDS_PER_WEEK),
    ("day", SECONDS_PER_DAY),
    ("hour", SECONDS_PER_HOUR),
    ("minute", SECONDS_PER_MINUTE),
    ("second", SECONDS_PER_SECOND),
)


class MetricFields(NamedTuple):
    """Seven decoded metric time fields."""

    year: int
    month: int
    week: int
    day: int
    hour: int
    minute: int
    second: int


def encode(
    year: int,
    month: int,
    week: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
) -> int:
    """
    Encode metric fields into a flat count of seconds.

    No range checks and no carrying: a month of 12 simply contributes
    120,000,000 seconds. Callers that want a round trip must supply
    canonical fields.
    """
    return (
        year * SECONDS_PER_YEAR
        + month * SECONDS_PER_MONTH
        + week * SECONDS_PER_WEEK
        + day * SECONDS_PER_DAY
        + hour * SECONDS_PER_HOUR
        + minute * SECONDS_PER_MINUTE
        + second * SECONDS_PER_SECOND
    )


def decode(epoch_seconds: int | float) -> MetricFields:
    """
    Decode a flat count of seconds into canonical metric fields.

    Fractional seconds are truncated. The result is always canonical
    because each field is the quotient left after removing every larger
    unit.
    """
    remaining = int(epoch_seconds)
    values = []

    for _, unit_seconds in RADIX:
        value, remaining = divmod(remaining, unit_seconds)
        values.append(value)

    return MetricFields(*values)


def is_canonical(fields: MetricFields) -> bool:
    """
    Return True if every field below the year is inside its place range.
    """
    if any(value < 0 for value in fields):
        return False

    bounds = [
        larger // smaller
        for (_, larger), (_, smaller) in zip(RADIX, RADIX[1:])
    ]

    return all(value < bound for value, bound in zip(fields[1:], bounds))
