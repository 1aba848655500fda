"""Command line entry point: start the browser or watch window titles."""

import argparse
import os
import re
import subprocess
import sys
import time
from collections.abc import Callable
from datetime import datetime, timezone

from videoguard.background import (
    set_bathroom_break_background,
    set_blocked_background,
    set_normal_background,
)
from videoguard.browser import BrowserManager
from videoguard.config import Config
from videoguard.state import AppState
from videoguard.title_filter import Filter

_CHILD_WINDOW = re.compile(r'^\s+0x[0-9a-fA-F]+ "(.*)":\s')


def _now() -> datetime:
    return datetime.now(timezone.utc)


def handle_start_browser(config: Config) -> None:
    """Start the browser unless it is blocked or a bathroom break is running."""
    state_file = config.files.state_file
    timeouts = config.timeouts
    state = AppState.load(state_file)

    if state.is_blocked():
        print("Browser is currently blocked")
        set_blocked_background(config.backgrounds.blocked)
        return

    if state.is_bathroom_break_time(timeouts.bathroom_break_interval_hours):
        if not state.in_bathroom_break:
            state.start_bathroom_break(
                timeouts.bathroom_break_minutes, timeouts.bathroom_break_interval_hours
            )
            state.save(state_file)
        if state.in_bathroom_break and state.bathroom_break_until is not None:
            if _now() < state.bathroom_break_until:
                print("It's bathroom break time")
                set_bathroom_break_background(config.backgrounds.bathroom_break)
                return
            state.end_bathroom_break()
            state.save(state_file)

    set_normal_background(config.backgrounds.normal)
    manager = BrowserManager(config.browser.executable, config.browser.process_name)
    try:
        manager.start_browser(config.browser.url)
    except OSError as exc:
        print(f"Failed to start browser: {exc}", file=sys.stderr)
    else:
        print("Browser started successfully")


def run_daemon(config: Config, window_titles: Callable[[], list[str]]) -> None:
    """Check window titles and break times forever, blocking the browser as needed.

    ``window_titles`` returns the current titles; errors it raises skip that check.
    """
    state_file = config.files.state_file
    timeouts = config.timeouts
    title_filter = Filter(config.files.blacklist, config.files.whitelist)
    manager = BrowserManager(config.browser.executable, config.browser.process_name)

    print("Starting daemon mode...")

    while True:
        state = AppState.load(state_file)

        try:
            titles = window_titles()
        except (OSError, RuntimeError):
            titles = None
        if titles is not None and title_filter.check_titles(titles):
            print("Blacklisted content detected, killing browser")
            manager.kill_browser_processes()
            state.block_browser(timeouts.blacklist_timeout_minutes)
            state.save(state_file)
            set_blocked_background(config.backgrounds.blocked)

        if (
            state.is_bathroom_break_time(timeouts.bathroom_break_interval_hours)
            and not state.in_bathroom_break
        ):
            print("Initiating bathroom break")
            manager.kill_browser_processes()
            state.start_bathroom_break(
                timeouts.bathroom_break_minutes, timeouts.bathroom_break_interval_hours
            )
            state.save(state_file)
            set_bathroom_break_background(config.backgrounds.bathroom_break)

        if (
            state.in_bathroom_break
            and state.bathroom_break_until is not None
            and _now() >= state.bathroom_break_until
        ):
            print("Bathroom break ended")
            state.end_bathroom_break()
            state.save(state_file)

        time.sleep(config.monitoring.check_frequency_seconds)


def _window_title_source() -> Callable[[], list[str]]:
    """Titles of the X root window's direct children, read with xwininfo."""
    if not os.environ.get("DISPLAY"):
        raise RuntimeError("Failed to open X11 display")

    def titles() -> list[str]:
        result = subprocess.run(
            ["xwininfo", "-root", "-children"], capture_output=True, check=False
        )
        if result.returncode != 0:
            raise RuntimeError("Failed to query window tree")
        text = result.stdout.decode("utf-8", errors="replace")
        return [
            match[1]
            for line in text.splitlines()
            if (match := _CHILD_WINDOW.match(line)) and match[1]
        ]

    return titles


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="videoguard",
        description="Monitors window titles and manages browser access",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0")
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        default="config.yaml",
        help="Sets the config file to use",
    )
    parser.add_argument(
        "--start-browser",
        action="store_true",
        help="Start browser with configured URL",
    )
    parser.add_argument(
        "-d",
        "--daemon",
        action="store_true",
        help="Run in daemon mode (monitor windows)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    try:
        config = Config.load(args.config)
    except (OSError, ValueError):
        print("Failed to load config, using defaults", file=sys.stderr)
        config = Config()

    if args.start_browser:
        try:
            handle_start_browser(config)
        except (OSError, ValueError, RuntimeError) as exc:
            print(f"Error starting browser: {exc}", file=sys.stderr)
    elif args.daemon:
        try:
            run_daemon(config, _window_title_source())
        except (OSError, ValueError, RuntimeError) as exc:
            print(f"Error running daemon: {exc}", file=sys.stderr)
    else:
        print(
            "Use --start-browser to start browser or --daemon to monitor windows",
            file=sys.stderr,
        )
    return 0