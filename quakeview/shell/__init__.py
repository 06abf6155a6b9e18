"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS feed client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakeview.shell.usgs_client import USGSFeedClient
from quakeview.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "USGSFeedClient",
    "load_config",
    "load_config_from_env",
]
