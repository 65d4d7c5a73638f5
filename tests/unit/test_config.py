"""
Unit tests for metriclock/config.py
"""

from pathlib import Path

import pytest

from metriclock.config import ClockConfig, load_config
from metriclock.engine.clock import ClockMode


class TestClockConfig:
    """Test suite for ClockConfig.from_mapping()."""

    def test_defaults_match_default_clock(self):
        """Test that an empty config describes SimulationClock()."""
        config = ClockConfig()
        assert config.speed == 1.0
        assert config.turn_duration == 6.0
        assert config.mode is ClockMode.REAL_TIME
        assert config.epoch_seconds == 0

    def test_none_gives_defaults(self):
        """Test that an empty YAML document is accepted."""
        assert ClockConfig.from_mapping(None) == ClockConfig()

    def test_clock_section(self):
        """Test options nested under a clock section."""
        config = ClockConfig.from_mapping(
            {"clock": {"speed": 2, "turn_duration": 3, "mode": "TurnBased"}}
        )
        assert config.speed == 2.0
        assert config.turn_duration == 3.0
        assert config.mode is ClockMode.TURN_BASED

    def test_root_level_options(self):
        """Test options at the document root."""
        config = ClockConfig.from_mapping({"epoch_seconds": 100_000_045})
        assert config.epoch_seconds == 100_000_045

    def test_non_mapping_raises(self):
        """Test that a list document is rejected."""
        with pytest.raises(ValueError) as exc_info:
            ClockConfig.from_mapping(["speed", 1])
        assert "must be a YAML mapping" in str(exc_info.value)

    def test_non_mapping_section_raises(self):
        """Test that the clock section must be a mapping."""
        with pytest.raises(ValueError) as exc_info:
            ClockConfig.from_mapping({"clock": 5})
        assert "'clock' section must be a mapping" in str(exc_info.value)

    def test_unknown_key_raises(self):
        """Test that typos are reported."""
        with pytest.raises(ValueError) as exc_info:
            ClockConfig.from_mapping({"sped": 2.0})
        assert "Unknown clock config keys: sped" in str(exc_info.value)

    def test_unknown_mode_raises(self):
        """Test that the mode must be a known name."""
        with pytest.raises(ValueError) as exc_info:
            ClockConfig.from_mapping({"mode": "Paused"})
        assert "'mode' must be one of: TurnBased, RealTime" in str(exc_info.value)

    @pytest.mark.parametrize(
        "key,value",
        [
            ("speed", "fast"),
            ("speed", True),
            ("turn_duration", None),
            ("epoch_seconds", 1.5),
        ],
    )
    def test_wrong_types_raise(self, key, value):
        """Test numeric option validation."""
        with pytest.raises(ValueError) as exc_info:
            ClockConfig.from_mapping({key: value})
        assert f"'{key}'" in str(exc_info.value)

    def test_negative_speed_is_accepted(self):
        """Test that the sign of the speed is not checked."""
        assert ClockConfig.from_mapping({"speed": -1}).speed == -1.0


class TestLoadConfig:
    """Test suite for load_config()."""

    def test_load_yaml(self, config_file):
        """Test reading a config from disk."""
        path = config_file(
            "clock:\n"
            "  speed: 0.5\n"
            "  turn_duration: 10\n"
            "  mode: TurnBased\n"
            "  epoch_seconds: 42\n"
        )
        config = load_config(path)
        assert config == ClockConfig(
            speed=0.5, turn_duration=10.0, mode=ClockMode.TURN_BASED, epoch_seconds=42
        )

    def test_load_empty_file(self, config_file):
        """Test that an empty file yields defaults."""
        assert load_config(config_file("")) == ClockConfig()

    def test_load_invalid_structure(self, config_file):
        """Test that a YAML scalar is rejected."""
        with pytest.raises(ValueError):
            load_config(config_file("just a string\n"))

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file surfaces the OS error."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
