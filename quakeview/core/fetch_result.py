"""Feed fetch outcomes - Pure data structures.

The shell's feed client returns these instead of raising, so the refresh
scheduler can commit either outcome to the working state.
"""

from dataclasses import dataclass
from enum import Enum

from quakeview.core.earthquake import Earthquake


class FetchErrorKind(str, Enum):
    """Why a feed fetch failed."""
    NETWORK_UNAVAILABLE = "network_unavailable"
    HTTP_STATUS = "http_status"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FetchError:
    """A non-fatal feed fetch failure.

    Attributes:
        kind: Failure category
        status_code: HTTP status for HTTP_STATUS failures
        detail: Extra context (exception text, payload problem)
    """
    kind: FetchErrorKind
    status_code: int | None = None
    detail: str | None = None

    @classmethod
    def network_unavailable(cls, detail: str | None = None) -> "FetchError":
        return cls(kind=FetchErrorKind.NETWORK_UNAVAILABLE, detail=detail)

    @classmethod
    def http_status(cls, status_code: int) -> "FetchError":
        return cls(kind=FetchErrorKind.HTTP_STATUS, status_code=status_code)

    @classmethod
    def malformed(cls, detail: str | None = None) -> "FetchError":
        return cls(kind=FetchErrorKind.MALFORMED, detail=detail)

    @property
    def message(self) -> str:
        """User-visible error message."""
        if self.kind == FetchErrorKind.HTTP_STATUS:
            return f"HTTP {self.status_code}"
        if self.kind == FetchErrorKind.MALFORMED:
            label = "Malformed feed"
        else:
            label = "Network unavailable"
        return f"{label}: {self.detail}" if self.detail else label


@dataclass(frozen=True)
class FetchResult:
    """Result of one feed fetch.

    Exactly one of records/error is set.

    Attributes:
        records: Normalized earthquakes in feed order
        error: Failure description
    """
    records: tuple[Earthquake, ...] | None = None
    error: FetchError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, records: list[Earthquake]) -> "FetchResult":
        return cls(records=tuple(records))

    @classmethod
    def failed(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)
