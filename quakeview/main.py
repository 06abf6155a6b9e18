"""Service Entry Point.

This module configures logging, loads configuration and serves the
dashboard API with uvicorn. It's a thin wrapper around quakeview.api.
"""

import argparse
import logging
import os

import uvicorn
from fastapi import FastAPI

from quakeview.api import create_app
from quakeview.core.config import Config
from quakeview.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config(config_path: str | None = None) -> Config:
    """Load configuration from file or environment."""
    config_path = config_path or os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FEED_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Build the served app on first use and reuse it afterwards."""
    global _app
    if _app is None:
        _app = create_app(_get_config())
    return _app


def __getattr__(name: str):
    # Resolved on access so importing this module never reads configuration.
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main() -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Serve the QuakeView earthquake dashboard API")
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")))
    args = parser.parse_args()

    config = _get_config(args.config)
    logger.info("Serving QuakeView on %s:%d (feed %s)", args.host, args.port, config.feed_url)

    uvicorn.run(create_app(config), host=args.host, port=args.port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
