"""Live, once-per-second recomputation of an age breakdown.

A ``LiveSession`` holds the cached birth instant and whether the display is
active.  A ``LiveTicker`` drives one background thread that recomputes the
breakdown from that session on every tick and hands the result to a
callback.  ``reset()`` cancels synchronously: when it returns, no further
tick will run.
"""

import datetime
import logging
import threading
from dataclasses import dataclass
from typing import Callable

from age_diff.dates import local_now
from age_diff.engine import compute_age_breakdown
from age_diff.models import AgeResult

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class LiveSession:
    birth: datetime.datetime
    active: bool = False


class LiveTicker:
    """Recompute ``session``'s breakdown every ``interval`` seconds.

    Args:
        session: The session whose birth instant is recomputed.
        on_tick: Called with each fresh ``AgeResult``.  If it raises, the
            error is logged and the ticker stops.
        clock: Source of the reference instant.  Defaults to local "now"
            truncated to whole seconds.
        interval: Seconds between ticks.
    """

    def __init__(
        self,
        session: LiveSession,
        on_tick: Callable[[AgeResult], None],
        clock: Callable[[], datetime.datetime] = local_now,
        interval: float = 1.0,
    ) -> None:
        self.session = session
        self.on_tick = on_tick
        self.clock = clock
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> AgeResult | None:
        """Run a single recomputation.  Returns None when the session is inactive."""
        if not self.session.active:
            return None
        result = compute_age_breakdown(self.session.birth, self.clock())
        self.on_tick(result)
        return result

    def start(self) -> None:
        """Activate the session, tick immediately, then tick once per interval."""
        if self.running:
            self.reset()
        self.session.active = True
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="live-ticker", daemon=True)
        self._thread.start()

    def reset(self) -> None:
        """Deactivate the session and wait for the ticker thread to exit."""
        self.session.active = False
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception:  # noqa: BLE001; logged, a failing tick ends the session
                logger.exception("Live tick failed; stopping ticker")
                self.session.active = False
                return
            if self._stop.wait(self.interval):
                return


def render_live(result: AgeResult) -> str:
    """Compact text frame: component grid and totals for both directions."""
    sc = result.since_birth.components
    st = result.since_birth.totals
    lines = [
        f"Age on {result.calculated_at}",
        f"  {sc.years:,} years  {sc.months} months  {sc.days} days  "
        f"{sc.hours:02d}:{sc.minutes:02d}:{sc.seconds:02d}",
        f"  Totals: {st.years:,} years | {st.months:,} months | {st.days:,} days | "
        f"{st.hours:,} hours | {st.minutes:,} minutes | {st.seconds:,} seconds",
    ]
    if result.is_birthday:
        lines.append(f"Congratulations! You are turning {result.turning_age} today!")
    else:
        nc = result.until_next_birthday.components
        nt = result.until_next_birthday.totals
        lines += [
            f"Next birthday {result.next_birthday_date}",
            f"  {nc.months} months  {nc.days} days  "
            f"{nc.hours:02d}:{nc.minutes:02d}:{nc.seconds:02d}",
            f"  Totals: {nt.months:,} months | {nt.days:,} days | {nt.hours:,} hours | "
            f"{nt.minutes:,} minutes | {nt.seconds:,} seconds",
        ]
    return "\n".join(lines)
