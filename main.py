"""Entry point for the age breakdown CLI.

Run with:
    python main.py                         # prompt, print and write the report
    python main.py --birthday 1990-05-15   # no prompt
    python main.py --live                  # redraw the breakdown every second
    python main.py --serve                 # run the HTTP API

The script configures logging, validates the birthday with the same rules as
the HTTP API, and then computes the breakdown against local "now".
"""

import argparse
import datetime
import logging
import sys
import threading

from age_diff.config import settings
from age_diff.dates import local_now
from age_diff.engine import compute_age_breakdown
from age_diff.errors import BirthdayInputError
from age_diff.live import LiveSession, LiveTicker, render_live
from age_diff.logging_setup import configure_logging
from age_diff.report import render_summary, write_summary
from age_diff.validation import parse_birthday

logger: logging.Logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calendar-accurate age breakdown.")
    parser.add_argument("--birthday", help="Birth date in YYYY-MM-DD format.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--live", action="store_true", help="Redraw the breakdown every second.")
    mode.add_argument("--serve", action="store_true", help="Run the HTTP API.")
    return parser.parse_args(argv)


def _serve() -> None:
    import uvicorn

    uvicorn.run("age_diff.api:app", host=settings.host, port=settings.port)


def _wait_for_interrupt() -> None:
    threading.Event().wait()


def _run_live(birth: datetime.datetime) -> None:
    def redraw(result) -> None:  # type: ignore[no-untyped-def]
        # clear screen, cursor home
        print("\x1b[2J\x1b[H" + render_live(result), flush=True)

    ticker = LiveTicker(LiveSession(birth=birth), on_tick=redraw)
    ticker.start()
    try:
        _wait_for_interrupt()
    except KeyboardInterrupt:
        pass
    finally:
        ticker.reset()


def run(argv: list[str] | None = None) -> None:
    """Configure logging, read the birthday, and run the selected mode.

    Exits with code 1 on invalid input so that callers (shell scripts, Docker
    health checks, etc.) can detect failure cleanly.
    """
    args = _parse_args(argv)
    configure_logging(settings.log_format)

    if args.serve:
        _serve()
        return

    birthday_raw = args.birthday
    if birthday_raw is None:
        print("Welcome to AgeDiff!")
        birthday_raw = input("Please enter your birthdate (YYYY-MM-DD, e.g. 1990-05-15): ")
    birthday_raw = birthday_raw.strip()

    now = local_now()
    try:
        birth = parse_birthday(birthday_raw, now)
    except BirthdayInputError as exc:
        print(f"Error: {exc.message}")
        sys.exit(1)

    if args.live:
        _run_live(birth)
        return

    result = compute_age_breakdown(birth, now)
    print(render_summary(result))
    try:
        write_summary(result, settings.output_dir)
    except OSError as exc:
        logger.error("Failed to write summary file: %s", exc)


if __name__ == "__main__":
    run()
