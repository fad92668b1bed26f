"""Smoke test for the age_diff package and, optionally, a running API server.

This script runs two tiers of checks:

1. **Static checks**: verifies the package is importable and that the engine
   reproduces a handful of fixed scenarios.  These run unconditionally.

2. **Live endpoint check**: calls ``/api/health`` and ``/api/calculate`` on a
   running server and validates the response shape.  This check requires the
   ``--base-url`` argument (or the ``AGEDIFF_BASE_URL`` environment variable)
   and is skipped with a notice when neither is given.

Usage
-----
    python scripts/smoke_test.py
    python scripts/smoke_test.py --base-url http://localhost:4000

Exit codes
----------
0   All checks passed (or live check was skipped due to missing base URL).
1   One or more checks failed.  A summary is printed to stdout.
"""

import argparse
import datetime
import importlib
import os
import sys
import time
import traceback
from pathlib import Path
from typing import Any, Callable

# Ensure the project root is on sys.path so age_diff is importable when the
# script is run directly without ``pip install``.
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

# Maximum number of attempts for the live check (handles server start-up).
_LIVE_MAX_ATTEMPTS = 3
_LIVE_RETRY_DELAY_SECONDS = 2

_LIVE_BIRTHDAY = "1990-01-01"


# ---------------------------------------------------------------------------
# Result accumulation
# ---------------------------------------------------------------------------

_results: list[tuple[str, bool, str]] = []


def _record(name: str, passed: bool, detail: str = "") -> bool:
    """Store a check result and print a one-line status.

    Returns:
        The value of ``passed``, so callers can use ``if not _record(...)``.
    """
    icon = "PASS" if passed else "FAIL"
    line = f"  [{icon}] {name}"
    if not passed and detail:
        line += f": {detail}"
    print(line)
    _results.append((name, passed, detail))
    return passed


def _run_check(name: str, fn: Callable[[], Any]) -> bool:
    """Execute ``fn``, catch any exception, and record the outcome."""
    try:
        fn()
        return _record(name, True)
    except Exception:  # noqa: BLE001; we want to catch everything for smoke tests
        detail = traceback.format_exc().strip().splitlines()[-1]
        return _record(name, False, detail)


# ---------------------------------------------------------------------------
# Static checks
# ---------------------------------------------------------------------------

def check_package_exports() -> None:
    mod = importlib.import_module("age_diff")
    for name in ("compute_age_breakdown", "format_date", "parse_date", "validate_calendar_date"):
        assert hasattr(mod, name), f"age_diff does not export {name!r}"


def check_component_scenario() -> None:
    from age_diff import compute_age_breakdown

    result = compute_age_breakdown(
        datetime.datetime(2000, 1, 1), datetime.datetime(2026, 6, 15, 10, 30, 45)
    )
    c = result.since_birth.components
    got = (c.years, c.months, c.days, c.hours, c.minutes, c.seconds)
    assert got == (26, 5, 14, 10, 30, 45), f"expected (26, 5, 14, 10, 30, 45), got {got}"


def check_next_birthday_rollover() -> None:
    from age_diff import compute_age_breakdown

    result = compute_age_breakdown(datetime.datetime(1990, 1, 10), datetime.datetime(2026, 2, 24))
    assert result.next_birthday_date == "2027-01-10", (
        f"expected 2027-01-10, got {result.next_birthday_date}"
    )


def check_calendar_validation() -> None:
    from age_diff import validate_calendar_date

    for year, month, day in ((2000, 2, 30), (2000, 13, 1), (2024, 4, 31)):
        assert not validate_calendar_date(year, month, day), f"{year}-{month}-{day} accepted"


def check_app_routes() -> None:
    from age_diff.api import app

    paths = {route.path for route in app.routes}
    for path in ("/api/health", "/api/calculate"):
        assert path in paths, f"route {path} missing; have {sorted(paths)}"


# ---------------------------------------------------------------------------
# Live endpoint check
# ---------------------------------------------------------------------------

def _check_live_once(base_url: str) -> None:
    import httpx

    with httpx.Client(base_url=base_url, timeout=5.0) as client:
        health = client.get("/api/health")
        assert health.status_code == 200, f"/api/health returned {health.status_code}"
        assert health.json().get("status") == "ok", f"unexpected health body {health.text!r}"

        res = client.get("/api/calculate", params={"birthday": _LIVE_BIRTHDAY})
        assert res.status_code == 200, f"/api/calculate returned {res.status_code}: {res.text!r}"
        body = res.json()
        assert body["birthday"] == _LIVE_BIRTHDAY, f"unexpected birthday {body['birthday']!r}"
        assert body["sinceBirth"]["totals"]["years"] == body["sinceBirth"]["components"]["years"]
        assert (body["turningAge"] is None) != body["isBirthday"], "birthday branch fields inconsistent"


def run_live_endpoint_check(base_url: str | None) -> None:
    """Call the running server, retrying to ride out start-up latency."""
    if not base_url:
        print(
            "\n  [SKIP] Live endpoint check: neither --base-url nor AGEDIFF_BASE_URL "
            "is set.  Pass a URL to enable this check."
        )
        return

    check_name = f"Live API check ({base_url})"
    last_error: str = ""
    for attempt in range(1, _LIVE_MAX_ATTEMPTS + 1):
        try:
            _check_live_once(base_url)
            _record(check_name, True)
            return
        except Exception:  # noqa: BLE001
            last_error = traceback.format_exc().strip().splitlines()[-1]
            if attempt < _LIVE_MAX_ATTEMPTS:
                print(
                    f"  [RETRY] Live check attempt {attempt}/{_LIVE_MAX_ATTEMPTS} failed "
                    f"({last_error}). Retrying in {_LIVE_RETRY_DELAY_SECONDS}s..."
                )
                time.sleep(_LIVE_RETRY_DELAY_SECONDS)

    _record(check_name, False, f"All {_LIVE_MAX_ATTEMPTS} attempts failed. Last error: {last_error}")


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Smoke test the age_diff package and API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python scripts/smoke_test.py\n"
            "  python scripts/smoke_test.py --base-url http://localhost:4000\n"
        ),
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("AGEDIFF_BASE_URL"),
        help="Base URL of a running API server (default: $AGEDIFF_BASE_URL).",
    )
    return parser.parse_args()


def main() -> None:
    """Run all smoke checks and exit with an appropriate code."""
    args = _parse_args()

    print("\n[smoke_test] Running smoke tests\n")

    static_checks: list[tuple[str, Callable[[], Any]]] = [
        ("age_diff exports its public API", check_package_exports),
        ("2000-01-01 -> 2026-06-15T10:30:45 == (26, 5, 14, 10, 30, 45)", check_component_scenario),
        ("next birthday rolls over to 2027-01-10", check_next_birthday_rollover),
        ("impossible dates fail calendar validation", check_calendar_validation),
        ("API exposes /api/health and /api/calculate", check_app_routes),
    ]

    for name, fn in static_checks:
        _run_check(name, fn)

    run_live_endpoint_check(args.base_url)

    total = len(_results)
    passed = sum(1 for _, ok, _ in _results if ok)
    failed = total - passed

    print(f"\n[smoke_test] Results: {passed}/{total} checks passed.")

    if failed > 0:
        print(
            f"[smoke_test] FAIL: {failed} check(s) failed. See above for details.",
            file=sys.stderr,
        )
        sys.exit(1)

    print("[smoke_test] PASS: All checks passed.")
    sys.exit(0)


if __name__ == "__main__":
    main()
