"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import math
from dataclasses import dataclass, field


USGS_FEED_BASE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

# Named USGS summary feeds
FEEDS = {
    "all_hour": f"{USGS_FEED_BASE}/all_hour.geojson",
    "all_day": f"{USGS_FEED_BASE}/all_day.geojson",
    "all_week": f"{USGS_FEED_BASE}/all_week.geojson",
    "all_month": f"{USGS_FEED_BASE}/all_month.geojson",
    "1.0_day": f"{USGS_FEED_BASE}/1.0_day.geojson",
    "2.5_day": f"{USGS_FEED_BASE}/2.5_day.geojson",
    "2.5_week": f"{USGS_FEED_BASE}/2.5_week.geojson",
    "4.5_day": f"{USGS_FEED_BASE}/4.5_day.geojson",
    "4.5_week": f"{USGS_FEED_BASE}/4.5_week.geojson",
    "significant_week": f"{USGS_FEED_BASE}/significant_week.geojson",
    "significant_month": f"{USGS_FEED_BASE}/significant_month.geojson",
}

DEFAULT_FEED_URL = FEEDS["all_day"]
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_REFRESH_INTERVAL_SECONDS = 300.0

# Intervals below this hammer the upstream feed, which only updates every minute
MIN_RECOMMENDED_INTERVAL_SECONDS = 60.0


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: GeoJSON feed endpoint
        request_timeout_seconds: Transport timeout for one fetch
        auto_refresh_enabled: Start with periodic refresh armed
        auto_refresh_interval_seconds: Period between automatic refreshes
        default_min_magnitude: Initial minimum magnitude filter
    """
    feed_url: str = DEFAULT_FEED_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    auto_refresh_enabled: bool = False
    auto_refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    default_min_magnitude: float = 0.0


def resolve_feed_url(feed: str) -> str:
    """Map a named feed to its URL; URLs pass through unchanged.

    Pure function.
    """
    return FEEDS.get(feed, feed)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_positive(value: float, field_name: str) -> list[ValidationError]:
    """Validate that a number is finite and greater than zero.

    Pure function.
    """
    if not math.isfinite(value) or value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be a positive number, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url.startswith(("http://", "https://")):
        if config.feed_url.startswith("${"):
            message = "Feed URL not resolved (still contains placeholder)"
        else:
            message = f"Feed URL must be http(s), got '{config.feed_url}'"
        errors.append(ValidationError(field="feed_url", message=message))

    errors.extend(validate_positive(
        config.request_timeout_seconds,
        "request_timeout_seconds",
    ))

    interval_errors = validate_positive(
        config.auto_refresh_interval_seconds,
        "auto_refresh_interval_seconds",
    )
    errors.extend(interval_errors)

    if not interval_errors and config.auto_refresh_interval_seconds < MIN_RECOMMENDED_INTERVAL_SECONDS:
        errors.append(ValidationError(
            field="auto_refresh_interval_seconds",
            message=(
                f"Interval {config.auto_refresh_interval_seconds}s is shorter than "
                f"the feed update period ({MIN_RECOMMENDED_INTERVAL_SECONDS:.0f}s)"
            ),
            severity="warning",
        ))

    if not math.isfinite(config.default_min_magnitude):
        errors.append(ValidationError(
            field="default_min_magnitude",
            message=f"Must be a finite number, got {config.default_min_magnitude}",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
