"""Service Entry Point - Root Module.

Lets the API be served from the repository root with `uvicorn main:app`.
It imports from the quakeview package.
"""

from quakeview.main import (
    get_app,
    main,
)

__all__ = [
    "get_app",
    "main",
]


def __getattr__(name: str):
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    main()
