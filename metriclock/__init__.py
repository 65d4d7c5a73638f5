"""
metriclock: a turn-based simulation clock in metric time.

Metric time follows the Hendricksonian metric calendar: 100 seconds to
the minute, 100 minutes to the hour, and tens from the hour up to the
year. The package provides:
- SimulationClock and ClockMode
- SimulationTimestamp and SimulationDateTime
- encode / decode for the mixed-radix conversion
- ClockConfig and ClockRunner for hosts that drive a clock
"""

from metriclock.config import ClockConfig, load_config
from metriclock.engine.clock import ClockMode, SimulationClock
from metriclock.engine.codec import MetricFields, decode, encode
from metriclock.engine.runner import ClockRunner
from metriclock.engine.timestamp import SimulationDateTime, SimulationTimestamp

__all__ = [
    "ClockConfig",
    "ClockMode",
    "ClockRunner",
    "MetricFields",
    "SimulationClock",
    "SimulationDateTime",
    "SimulationTimestamp",
    "decode",
    "encode",
    "load_config",
]
