"""Refresh Scheduler - drives the feed client.

Runs on a single asyncio event loop. The blocking HTTP call is pushed to
the loop's default executor; every read and write of the working state
happens on the loop itself, so no locking is needed.

At most one fetch is in flight at a time. A refresh requested while one
is running is dropped, not queued.
"""

import asyncio
import contextlib
import logging
import math
from datetime import datetime, timezone
from typing import Callable, Protocol

from quakeview.core.config import DEFAULT_REFRESH_INTERVAL_SECONDS
from quakeview.core.fetch_result import FetchError, FetchResult
from quakeview.core.state import (
    AppContext,
    apply_fetch_failure,
    apply_fetch_success,
    begin_fetch,
)


logger = logging.getLogger(__name__)


class FeedClient(Protocol):
    def fetch_all(self) -> FetchResult:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_interval(interval_seconds: float) -> float:
    if not math.isfinite(interval_seconds) or interval_seconds <= 0:
        raise ValueError(f"Refresh interval must be positive, got {interval_seconds}")
    return interval_seconds


class RefreshScheduler:
    """Fetches the feed on demand and on a periodic timer.

    Results are committed to the context's working state; the optional
    on_records_changed hook runs after each successful replacement.
    """

    def __init__(
        self,
        feed_client: FeedClient,
        context: AppContext,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
        on_records_changed: Callable[[], None] | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            feed_client: Client with a blocking fetch_all()
            context: State container the results are committed to
            interval_seconds: Default auto-refresh period
            clock: Source of fetch timestamps
            on_records_changed: Called after records are replaced
        """
        self.feed_client = feed_client
        self.context = context
        self.interval_seconds = _check_interval(interval_seconds)
        self.clock = clock
        self.on_records_changed = on_records_changed

        self._timer_task: asyncio.Task | None = None
        self._fetch_task: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self.context.working.loading

    @property
    def auto_refresh_enabled(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    def _apply(self, result: FetchResult) -> None:
        """Commit a fetch result to the working state."""
        working = self.context.working

        if result.success:
            records = result.records or ()
            self.context.working = apply_fetch_success(working, records, self.clock())
            logger.info("Applied %d earthquakes from feed", len(records))
            if self.on_records_changed is not None:
                self.on_records_changed()
        else:
            self.context.working = apply_fetch_failure(working, result.error)
            logger.warning(
                "Refresh failed, keeping %d existing earthquakes: %s",
                len(working.records),
                result.error.message,
            )

    def _claim(self) -> bool:
        """Mark a fetch as in flight unless one already is.

        Runs without awaiting, so the check and the set cannot interleave
        with another coroutine.
        """
        if self.in_flight:
            logger.debug("Refresh already in flight, skipping")
            return False
        self.context.working = begin_fetch(self.context.working)
        return True

    async def _fetch(self) -> None:
        """Run one claimed fetch to completion and apply it."""
        try:
            result = await asyncio.to_thread(self.feed_client.fetch_all)
        except Exception as e:
            logger.exception("Unexpected error fetching earthquake feed")
            result = FetchResult.failed(
                FetchError.network_unavailable(f"unexpected error: {e}")
            )

        self._apply(result)

    async def trigger_refresh(self) -> bool:
        """Fetch the feed and apply the result.

        A no-op when a fetch is already in flight.

        Returns:
            True if a fetch ran, False if it was skipped
        """
        if not self._claim():
            return False

        # The fetch outlives a cancelled caller; its result is always applied.
        await asyncio.shield(self._start_fetch())
        return True

    def request_refresh(self) -> asyncio.Task | None:
        """Start a refresh in the background.

        Must be called from the event loop.

        Returns:
            The fetch task, or None if a fetch is already in flight
        """
        if not self._claim():
            return None

        return self._start_fetch()

    def _start_fetch(self) -> asyncio.Task:
        self._fetch_task = asyncio.get_running_loop().create_task(self._fetch())
        return self._fetch_task

    async def _timer_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            logger.debug("Auto-refresh tick")
            self.request_refresh()

    def set_auto_refresh(self, enabled: bool, interval_seconds: float | None = None) -> None:
        """Arm or disarm the periodic refresh timer.

        Enabling while already enabled restarts the interval. Disabling
        cancels the pending tick but never an in-flight fetch.

        Args:
            enabled: Whether periodic refresh should run
            interval_seconds: New period (keeps the current one if None)
        """
        if interval_seconds is not None:
            self.interval_seconds = _check_interval(interval_seconds)

        self._cancel_timer()

        if enabled:
            self._timer_task = asyncio.get_running_loop().create_task(
                self._timer_loop(self.interval_seconds)
            )
            logger.info("Auto-refresh enabled every %.1fs", self.interval_seconds)
        else:
            logger.info("Auto-refresh disabled")

    def _cancel_timer(self) -> None:
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

    async def start(self, auto_refresh: bool = False) -> None:
        """Run the startup fetch, then arm the timer if requested."""
        await self.trigger_refresh()
        if auto_refresh:
            self.set_auto_refresh(True)

    async def stop(self) -> None:
        """Disarm the timer and wait for an in-flight fetch to finish."""
        timer = self._timer_task
        self._cancel_timer()
        if timer is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await timer

        if self._fetch_task is not None and not self._fetch_task.done():
            await self._fetch_task
        self._fetch_task = None
