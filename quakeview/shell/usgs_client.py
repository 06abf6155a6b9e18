"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS GeoJSON summary feed.
All I/O is contained here; normalization is in the core module.
"""

import logging
from typing import Any

import requests

from quakeview.core.config import DEFAULT_FEED_URL, DEFAULT_TIMEOUT_SECONDS
from quakeview.core.earthquake import parse_features
from quakeview.core.fetch_result import FetchError, FetchResult


logger = logging.getLogger(__name__)


class USGSFeedClient:
    """Client for fetching the earthquake feed.

    This is part of the imperative shell - it handles HTTP I/O. It never
    raises for network, status or payload problems; failures come back
    as a FetchResult carrying a FetchError.
    """

    def __init__(
        self,
        feed_url: str = DEFAULT_FEED_URL,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize feed client.

        Args:
            feed_url: GeoJSON feed URL
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.feed_url = feed_url
        self.timeout = timeout

    def _extract_features(self, payload: Any) -> list[Any] | None:
        """Return the features list, or None if the payload is malformed."""
        if not isinstance(payload, dict):
            return None

        features = payload.get("features", [])
        if not isinstance(features, list):
            return None

        return features

    def fetch_all(self) -> FetchResult:
        """Fetch and normalize every event in the feed.

        This method performs HTTP I/O.

        Returns:
            FetchResult with records in feed order, or the failure
        """
        logger.info("Fetching earthquake feed from %s", self.feed_url)

        try:
            response = requests.get(self.feed_url, timeout=self.timeout)
        except requests.Timeout:
            logger.error("Feed request timed out")
            return FetchResult.failed(
                FetchError.network_unavailable("request timed out")
            )
        except requests.RequestException as e:
            logger.error("Feed request failed: %s", str(e))
            return FetchResult.failed(FetchError.network_unavailable(str(e)))

        if not 200 <= response.status_code < 300:
            logger.warning("Feed returned HTTP %d", response.status_code)
            return FetchResult.failed(FetchError.http_status(response.status_code))

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Feed body is not valid JSON: %s", str(e))
            return FetchResult.failed(FetchError.malformed("invalid JSON"))

        features = self._extract_features(payload)
        if features is None:
            logger.error("Feed payload has no usable features list")
            return FetchResult.failed(
                FetchError.malformed("expected a FeatureCollection")
            )

        earthquakes = parse_features(features)

        logger.info(
            "Fetched %d earthquakes (%d features)",
            len(earthquakes),
            len(features),
        )

        return FetchResult.ok(earthquakes)
