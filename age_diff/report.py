"""Plain-text summary report rendered from an ``AgeResult``.

The report is a pure projection of the result: rendering never feeds back
into the engine.  ``write_summary`` drops it into the configured output
directory as ``age_summary.txt``.
"""

import logging
import math
from pathlib import Path

from age_diff.models import AgeResult, BirthdayResult

logger: logging.Logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "age_summary.txt"
WIDTH = 58
MAX_BAR = 36

BIRTHDAY_CAKE: str = "\n".join(
    [
        "            *    *    *    *    *",
        "            |    |    |    |    |",
        "           .|.  .|.  .|.  .|.  .|.",
        "       ____|_|__|_|__|_|__|_|__|_|____",
        "      |                              |",
        "      | ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~  |",
        "      |   H A P P Y                  |",
        "      |       B I R T H D A Y !      |",
        "      | ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~ ~  |",
        "      |______________________________|",
        "      |                              |",
        "      |   * * * * * * * * * * * * *  |",
        "      |______________________________|",
        "       \\____________________________/",
    ]
)


def center(text: str, width: int) -> str:
    """Centre ``text`` in ``width`` columns, extra padding on the right."""
    pad = max(0, width - len(text))
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def group_thousands(value: int) -> str:
    return f"{value:,}"


def bar_length(value: int, max_value: int) -> int:
    """Bar width for ``value``: proportional to the group maximum, at least 1."""
    # half-up rounding
    return max(1, math.floor(value / max(max_value, 1) * MAX_BAR + 0.5))


def ascii_bars(items: list[tuple[str, int]]) -> list[str]:
    max_value = max([value for _, value in items] + [1])
    return [
        f"    {label:<7} {'#' * bar_length(value, max_value)} {value}"
        for label, value in items
    ]


def _section_rule(title: str) -> str:
    heading = f"-- {title} "
    return heading + "-" * (WIDTH - len(heading))


def render_summary(result: AgeResult) -> str:
    """Render the full summary report for ``result``."""
    rule = "=" * WIDTH
    lines: list[str] = []

    if isinstance(result, BirthdayResult):
        lines += [
            f"+{rule}+",
            f"|{center('HAPPY BIRTHDAY!', WIDTH)}|",
            f"|{center(f'You are turning {result.turning_age} today!', WIDTH)}|",
            f"+{rule}+",
            "",
            BIRTHDAY_CAKE,
            "",
        ]
    else:
        lines += [
            f"+{rule}+",
            f"|{center('AGE DIFFERENCE - Summary Report', WIDTH)}|",
            f"+{rule}+",
        ]

    lines += [
        "",
        f"  Birthday:    {result.birthday}",
        f"  Calculated:  {result.calculated_at}",
        "",
        _section_rule("Time Since Birth"),
        "",
    ]

    sc = result.since_birth.components
    st = result.since_birth.totals
    lines += [
        "  Component Breakdown:",
        f"    {sc.years} years, {sc.months} months, {sc.days} days,",
        f"    {sc.hours} hours, {sc.minutes} minutes, {sc.seconds} seconds",
        "",
        "  Total in Each Unit:",
        f"    Years:   {group_thousands(st.years)}",
        f"    Months:  {group_thousands(st.months)}",
        f"    Days:    {group_thousands(st.days)}",
        f"    Hours:   {group_thousands(st.hours)}",
        f"    Minutes: {group_thousands(st.minutes)}",
        f"    Seconds: {group_thousands(st.seconds)}",
        "",
        "  Visual Breakdown:",
    ]
    lines += ascii_bars(
        [
            ("Years", sc.years),
            ("Months", sc.months),
            ("Days", sc.days),
            ("Hours", sc.hours),
            ("Minutes", sc.minutes),
            ("Seconds", sc.seconds),
        ]
    )
    lines.append("")

    if result.until_next_birthday is not None:
        nc = result.until_next_birthday.components
        nt = result.until_next_birthday.totals
        lines += [
            _section_rule("Time Until Next Birthday"),
            "",
            "  Component Breakdown:",
            f"    {nc.months} months, {nc.days} days,",
            f"    {nc.hours} hours, {nc.minutes} minutes, {nc.seconds} seconds",
            "",
            "  Total in Each Unit:",
            f"    Months:  {group_thousands(nt.months)}",
            f"    Days:    {group_thousands(nt.days)}",
            f"    Hours:   {group_thousands(nt.hours)}",
            f"    Minutes: {group_thousands(nt.minutes)}",
            f"    Seconds: {group_thousands(nt.seconds)}",
            "",
            "  Visual Countdown:",
        ]
        lines += ascii_bars(
            [
                ("Months", nc.months),
                ("Days", nc.days),
                ("Hours", nc.hours),
                ("Minutes", nc.minutes),
                ("Seconds", nc.seconds),
            ]
        )
        lines += ["", f"  Next birthday: {result.next_birthday_date}"]
    else:
        lines.append(_section_rule("It's your birthday today!"))

    lines += ["", rule, ""]
    return "\n".join(lines)


def write_summary(result: AgeResult, output_dir: Path) -> Path:
    """Write the rendered report to ``output_dir/age_summary.txt``.

    The directory is created if it does not exist.

    Returns:
        The path of the written file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / SUMMARY_FILENAME
    path.write_text(render_summary(result), encoding="utf-8")
    logger.info("Summary written to %s", path)
    return path
