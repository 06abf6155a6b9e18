"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core (normalization, filtering, selection) and the I/O-performing shell
(feed client, refresh timer). It is the only object the presentation
layer talks to: it exposes a read-only DashboardView and accepts user
intents.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from quakeview.core.config import Config, validate_config
from quakeview.core.earthquake import Earthquake
from quakeview.core.filters import VisibleRecords
from quakeview.core.map_view import ViewportTarget
from quakeview.core.selection import SelectionCoordinator
from quakeview.core.state import (
    AppContext,
    FilterState,
    clear_search,
    commit_search,
    set_min_magnitude,
    set_pending_search,
)
from quakeview.scheduler import FeedClient, RefreshScheduler
from quakeview.shell.usgs_client import USGSFeedClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer renders.

    Attributes:
        visible: Filtered earthquakes in feed order
        total: Number of earthquakes in the working state
        loading: True while a fetch is in flight
        error: Last fetch error message, if the last fetch failed
        last_fetched_at: Time of the last successful fetch
        selected: Selected earthquake, resolved against current records
        focus: Viewport target for the selection, if it has coordinates
        filters: Current filter inputs
        auto_refresh_enabled: Whether periodic refresh is armed
        auto_refresh_interval_seconds: Periodic refresh interval
    """
    visible: tuple[Earthquake, ...]
    total: int
    loading: bool
    error: str | None
    last_fetched_at: datetime | None
    selected: Earthquake | None
    focus: ViewportTarget | None
    filters: FilterState
    auto_refresh_enabled: bool
    auto_refresh_interval_seconds: float


class Orchestrator:
    """Coordinates feed refreshes, filtering and selection.

    This class wires together:
    - Feed client (fetches earthquake data)
    - Refresh scheduler (manual and periodic refresh)
    - Core functions (filtering, selection)
    """

    def __init__(
        self,
        config: Config | None = None,
        feed_client: FeedClient | None = None,
        context: AppContext | None = None,
        scheduler: RefreshScheduler | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration (defaults if not provided)
            feed_client: Feed client (created from config if not provided)
            context: State container (created empty if not provided)
            scheduler: Refresh scheduler (created if not provided)
        """
        self.config = config or Config()

        validation = validate_config(self.config)
        for issue in validation.warnings:
            logger.warning("Config %s: %s", issue.field, issue.message)
        if not validation.valid:
            messages = "; ".join(
                f"{e.field}: {e.message}" for e in validation.critical_errors
            )
            raise ValueError(f"Invalid configuration: {messages}")

        self.context = context or AppContext(
            filters=FilterState(min_magnitude=self.config.default_min_magnitude),
        )
        self.feed_client = feed_client or USGSFeedClient(
            feed_url=self.config.feed_url,
            timeout=self.config.request_timeout_seconds,
        )
        self.selection = SelectionCoordinator(self.context)
        self.scheduler = scheduler or RefreshScheduler(
            self.feed_client,
            self.context,
            interval_seconds=self.config.auto_refresh_interval_seconds,
        )
        self.scheduler.on_records_changed = self._on_records_changed
        self._visible = VisibleRecords()

    def _on_records_changed(self) -> None:
        self.selection.reconcile()

    # ----- Lifecycle -----

    async def start(self) -> None:
        """Perform the startup fetch and arm auto-refresh if configured."""
        logger.info("Starting earthquake feed pipeline")
        await self.scheduler.start(auto_refresh=self.config.auto_refresh_enabled)

    async def stop(self) -> None:
        logger.info("Stopping earthquake feed pipeline")
        await self.scheduler.stop()

    # ----- Presentation boundary -----

    def visible(self) -> tuple[Earthquake, ...]:
        """Filtered earthquakes, recomputed only when inputs changed."""
        return self._visible.get(self.context.working, self.context.filters)

    def view(self) -> DashboardView:
        """Snapshot of everything the presentation layer needs."""
        working = self.context.working
        return DashboardView(
            visible=self.visible(),
            total=len(working.records),
            loading=working.loading,
            error=working.last_error.message if working.last_error else None,
            last_fetched_at=working.last_fetched_at,
            selected=self.selection.current(),
            focus=self.selection.focus(),
            filters=self.context.filters,
            auto_refresh_enabled=self.scheduler.auto_refresh_enabled,
            auto_refresh_interval_seconds=self.scheduler.interval_seconds,
        )

    # ----- Intents -----

    def set_min_magnitude(self, value: float) -> None:
        self.context.filters = set_min_magnitude(self.context.filters, value)
        logger.debug("Minimum magnitude set to %s", value)

    def set_pending_search(self, text: str) -> None:
        self.context.filters = set_pending_search(self.context.filters, text)

    def commit_search(self) -> None:
        """Apply the pending search text."""
        self.context.filters = commit_search(self.context.filters)
        logger.debug("Search committed: %r", self.context.filters.committed_search)

    def clear_search(self) -> None:
        self.context.filters = clear_search(self.context.filters)

    async def refresh(self) -> bool:
        """Manual refresh. Returns False if a fetch was already in flight."""
        return await self.scheduler.trigger_refresh()

    def set_auto_refresh(self, enabled: bool, interval_seconds: float | None = None) -> None:
        self.scheduler.set_auto_refresh(enabled, interval_seconds)

    def select(self, earthquake_id: str) -> None:
        self.selection.select(earthquake_id)

    def clear_selection(self) -> None:
        self.selection.clear()
