"""
Clock configuration.

The two SimulationClock constructors bake in different defaults. A
ClockConfig names every option instead, and can be read from YAML:

    clock:
      speed: 1.0
      turn_duration: 6
      mode: RealTime
      epoch_seconds: 0

The top-level `clock:` section is optional; the options may also sit at
the document root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from metriclock.engine.clock import ClockMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockConfig:
    """
    Explicit clock options. Defaults match SimulationClock().
    """

    speed: float = 1.0
    turn_duration: float = 6.0
    mode: ClockMode = ClockMode.REAL_TIME
    epoch_seconds: int = 0

    @classmethod
    def from_mapping(cls, data: Any) -> ClockConfig:
        """
        Build a config from a parsed YAML document and validate structure.
        """
        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError("Clock config must be a YAML mapping (dict)")

        if "clock" in data:
            data = data["clock"]
            if not isinstance(data, dict):
                raise ValueError("'clock' section must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown clock config keys: {', '.join(map(str, unknown))}")

        options: dict[str, Any] = {}

        for name in ("speed", "turn_duration"):
            if name in data:
                value = data[name]
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"'{name}' must be a number")
                options[name] = float(value)

        if "epoch_seconds" in data:
            value = data["epoch_seconds"]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError("'epoch_seconds' must be an integer")
            options["epoch_seconds"] = value

        if "mode" in data:
            try:
                options["mode"] = ClockMode(data["mode"])
            except ValueError:
                raise ValueError(
                    f"'mode' must be one of: {', '.join(m.value for m in ClockMode)}"
                ) from None

        return cls(**options)


def load_config(path: Path) -> ClockConfig:
    """
    Load a ClockConfig from a YAML file.
    """
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    config = ClockConfig.from_mapping(data)
    logger.info("Loaded clock config from %s: %s", path, config)
    return config
