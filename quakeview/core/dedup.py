"""Batch identity logic - Pure functions.

Event ids are only guaranteed unique within a single feed response.
These helpers enforce that within a batch; nothing here tries to
reconcile identities across refreshes.
"""

import logging
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from quakeview.core.earthquake import Earthquake


logger = logging.getLogger(__name__)


def find_duplicate_ids(earthquakes: Iterable["Earthquake"]) -> set[str]:
    """Find ids that occur more than once.

    Pure function.

    Args:
        earthquakes: Earthquakes from one batch

    Returns:
        Set of ids seen at least twice
    """
    seen: set[str] = set()
    duplicates: set[str] = set()
    for earthquake in earthquakes:
        if earthquake.id in seen:
            duplicates.add(earthquake.id)
        seen.add(earthquake.id)
    return duplicates


def dedupe_by_id(earthquakes: list["Earthquake"]) -> list["Earthquake"]:
    """Drop repeated ids, keeping the first occurrence.

    Pure function. Relative order of the kept records is unchanged.

    Args:
        earthquakes: Earthquakes from one batch

    Returns:
        Earthquakes with unique ids
    """
    duplicates = find_duplicate_ids(earthquakes)
    if not duplicates:
        return list(earthquakes)

    logger.debug("Dropping repeats of %d duplicate event ids", len(duplicates))

    seen: set[str] = set()
    unique = []
    for earthquake in earthquakes:
        if earthquake.id in seen:
            continue
        seen.add(earthquake.id)
        unique.append(earthquake)

    return unique


def find_by_id(
    earthquakes: Iterable["Earthquake"],
    earthquake_id: str,
) -> "Earthquake | None":
    """Look up an earthquake by id.

    Pure function.

    Returns:
        The matching earthquake or None
    """
    for earthquake in earthquakes:
        if earthquake.id == earthquake_id:
            return earthquake
    return None
