"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in quakeview/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakeview.core.config import (
    DEFAULT_FEED_URL,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    Config,
    resolve_feed_url,
)


logger = logging.getLogger(__name__)


TRUE_VALUES = {"1", "true", "yes", "on"}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place (validation flags it).
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_bool(value: Any) -> bool:
    """Parse a YAML or environment boolean."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def _parse_feed_url(data: dict[str, Any]) -> str:
    """Pick the feed URL: explicit feed_url wins over a named feed."""
    if "feed_url" in data:
        return str(_resolve_value(data["feed_url"]))
    if "feed" in data:
        return resolve_feed_url(str(_resolve_value(data["feed"])))
    return DEFAULT_FEED_URL


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    auto_refresh = data.get("auto_refresh", {}) or {}

    return Config(
        feed_url=_parse_feed_url(data),
        request_timeout_seconds=float(
            data.get("request_timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        ),
        auto_refresh_enabled=_parse_bool(auto_refresh.get("enabled", False)),
        auto_refresh_interval_seconds=float(
            auto_refresh.get("interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS)
        ),
        default_min_magnitude=float(data.get("min_magnitude", 0.0)),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: feed %s, auto-refresh %s every %.0fs",
        config.feed_url,
        "on" if config.auto_refresh_enabled else "off",
        config.auto_refresh_interval_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for container deployments without a YAML file.

    Environment variables:
        FEED_URL: Feed URL or named feed (e.g. "all_week")
        REQUEST_TIMEOUT_SECONDS: Transport timeout
        AUTO_REFRESH: Enable periodic refresh ("true"/"false")
        AUTO_REFRESH_INTERVAL_SECONDS: Refresh period
        MIN_MAGNITUDE: Initial minimum magnitude filter

    Returns:
        Config object from environment
    """
    feed = os.environ.get("FEED_URL")

    return Config(
        feed_url=resolve_feed_url(feed) if feed else DEFAULT_FEED_URL,
        request_timeout_seconds=float(
            os.environ.get("REQUEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        ),
        auto_refresh_enabled=_parse_bool(os.environ.get("AUTO_REFRESH", "false")),
        auto_refresh_interval_seconds=float(
            os.environ.get("AUTO_REFRESH_INTERVAL_SECONDS", DEFAULT_REFRESH_INTERVAL_SECONDS)
        ),
        default_min_magnitude=float(os.environ.get("MIN_MAGNITUDE", "0")),
    )
