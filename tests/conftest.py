"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from metriclock.engine.clock import SimulationClock  # noqa: E402


@pytest.fixture
def clock() -> SimulationClock:
    """Default simulation clock: real-time, speed 1.0, six second turns."""
    return SimulationClock()


@pytest.fixture
def turn_clock() -> SimulationClock:
    """Default clock already switched into turn-based mode."""
    clock = SimulationClock()
    clock.enable_turn_mode()
    return clock


@pytest.fixture
def config_file(tmp_path: Path):
    """Write a YAML clock config and return its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "clock.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
