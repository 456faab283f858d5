#!/usr/bin/env python3
"""
knobring - multi-revolution knob demo

Opens a window with a knob whose ring wraps up to three times around,
plus live controls for snapping, smoothing and input modes.
"""

import argparse
import cProfile
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from logging_utils import log_event, set_log_level


def run_app(app_argv: list[str], config_path: Path | None, log_level: str | None) -> int:
    app = QApplication(app_argv)
    app.setStyle("Fusion")

    from config_persistence import load_config
    from main import KnobDemoWindow

    config = load_config(config_path)
    if log_level:
        config.log_level = log_level.upper()

    window = KnobDemoWindow(config, config_path)
    window.show()
    log_event("INFO", "App", "Initialization complete. Starting GUI...")

    return app.exec()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the knobring demo")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file to load and save (default: ~/.knobring/config.json)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the persisted log level",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile and save stats to --profile-out",
    )
    parser.add_argument(
        "--profile-out",
        default="profile.prof",
        help="Path to save cProfile stats (default: profile.prof)",
    )
    args = parser.parse_args()

    if args.log_level:
        set_log_level(args.log_level)

    # Keep Qt argument list clean; avoid passing our flags downstream
    app_argv = [sys.argv[0]]

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        exit_code = run_app(app_argv, args.config, args.log_level)
        profiler.disable()
        profiler.dump_stats(args.profile_out)
    else:
        exit_code = run_app(app_argv, args.config, args.log_level)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
