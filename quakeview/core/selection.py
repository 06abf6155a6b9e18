"""Selection tracking.

The coordinator stores only the selected id and resolves it against the
context's working state on every read, so a refresh can never leave it
pointing at a stale record object.
"""

import logging

from quakeview.core.dedup import find_by_id
from quakeview.core.earthquake import Earthquake
from quakeview.core.map_view import ViewportTarget, focus_viewport
from quakeview.core.state import AppContext


logger = logging.getLogger(__name__)


class SelectionCoordinator:
    """Holds the single selected earthquake for an AppContext."""

    def __init__(self, context: AppContext) -> None:
        self.context = context

    @property
    def selected_id(self) -> str | None:
        return self.context.selected_id

    def select(self, earthquake_id: str) -> None:
        """Select an earthquake by id. Selecting the current id is a no-op."""
        if self.context.selected_id == earthquake_id:
            return
        logger.debug("Selected earthquake %s", earthquake_id)
        self.context.selected_id = earthquake_id

    def clear(self) -> None:
        """Clear the selection."""
        if self.context.selected_id is not None:
            logger.debug("Cleared selection %s", self.context.selected_id)
        self.context.selected_id = None

    def current(self) -> Earthquake | None:
        """Resolve the selected id against the current records.

        Returns:
            The selected earthquake, or None if nothing is selected or the
            id is no longer in the working state
        """
        if self.context.selected_id is None:
            return None
        return find_by_id(self.context.working.records, self.context.selected_id)

    def reconcile(self) -> bool:
        """Drop a selection whose id vanished from the working state.

        Called after the records are replaced.

        Returns:
            True if the selection was cleared
        """
        if self.context.selected_id is None or self.current() is not None:
            return False

        logger.info(
            "Selected earthquake %s no longer in feed, clearing selection",
            self.context.selected_id,
        )
        self.context.selected_id = None
        return True

    def focus(self) -> ViewportTarget | None:
        """Viewport target for the selected earthquake, if it has coordinates."""
        return focus_viewport(self.current())
