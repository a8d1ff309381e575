"""Exception taxonomy.

Absent results (no forecast in today's window, no geocoding match) are
``None``, not exceptions. Everything below is a real failure.
"""

from __future__ import annotations


class KoreaWeatherError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInput(KoreaWeatherError, ValueError):
    """Malformed coordinates or query arguments. Caller bug, never retried."""


class ProviderUnavailable(KoreaWeatherError):
    """An upstream HTTP provider failed or returned an unusable payload."""

    def __init__(self, message: str, *, provider: str, status: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is not None:
            return f"{self.provider}: {base} (HTTP {self.status})"
        return f"{self.provider}: {base}"


class CapacityExceeded(KoreaWeatherError):
    """The favorites collection is full."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"즐겨찾기는 최대 {limit}개까지 등록할 수 있습니다.")
        self.limit = limit


class DuplicateFavorite(KoreaWeatherError):
    """A favorite at the same place already exists."""

    def __init__(self, existing_id: str) -> None:
        super().__init__(f"이미 즐겨찾기에 등록된 위치입니다 (id={existing_id}).")
        self.existing_id = existing_id


class PositionUnavailable(KoreaWeatherError):
    """The device position could not be obtained (permission or hardware)."""
