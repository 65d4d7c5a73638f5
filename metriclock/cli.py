# metriclock/cli.py

from __future__ import annotations
import argparse
import logging
import signal
import sys
from pathlib import Path

from metriclock.config import ClockConfig, load_config
from metriclock.engine.clock import SimulationClock
from metriclock.engine.runner import ClockRunner


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="metriclock.cli",
        description=(
            "Drive a metric simulation clock through a real-time, "
            "turn-based and real-time sequence"
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a clock config YAML file",
    )
    parser.add_argument(
        "--frame-rate",
        type=float,
        default=60.0,
        help="Frames per second of wall time",
    )
    parser.add_argument(
        "--realtime-seconds",
        type=float,
        default=20.0,
        help="Wall seconds to run in each real-time phase",
    )
    parser.add_argument(
        "--turn-seconds",
        type=float,
        default=20.0,
        help="Wall seconds to run in the turn-based phase",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Override the configured clock speed",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log clock transitions to stderr",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.config is None:
        config = ClockConfig()
    elif not args.config.exists():
        print(f"Config file not found: {args.config}", file=sys.stderr)
        return 1
    else:
        try:
            config = load_config(args.config)
        except Exception as exc:
            print(f"Failed to load config: {exc}", file=sys.stderr)
            return 2

    def report_turn(turn_clock: SimulationClock) -> None:
        print(f"turn complete  {turn_clock.current_datetime()}")

    try:
        clock = SimulationClock.from_config(config)
        if args.speed is not None:
            clock.set_clock_speed(args.speed)

        if args.frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {args.frame_rate}")

        runner = ClockRunner(
            clock,
            frame_delta=1.0 / args.frame_rate,
            on_turn_complete=report_turn,
        )

        print(f"start          {clock.current_datetime()}")

        clock.disable_turn_mode()
        runner.run_for(args.realtime_seconds)
        print(f"real-time      {clock.current_datetime()}")

        clock.enable_turn_mode()
        runner.run_for(args.turn_seconds)
        print(f"turn-based     {clock.current_datetime()}")

        clock.disable_turn_mode()
        runner.run_for(args.realtime_seconds)
        print(f"real-time      {clock.current_datetime()}")

    except Exception as exc:
        print(f"Clock run failed: {exc}", file=sys.stderr)
        return 3

    print(
        f"Ran {runner.frames} frames, {runner.turns_completed} turns, "
        f"{clock.current_timestamp()} seconds"
    )
    return 0  # success


if __name__ == "__main__":

    signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())
