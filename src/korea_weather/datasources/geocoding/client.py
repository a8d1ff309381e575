"""Geocoding constants and the provider contract.

Every provider is an async callable ``(input) -> Outcome[T]``. Providers
absorb their own transport and payload errors and report them as a failed
``Outcome``. The chain runner still treats an exception from a provider as
a failure and moves on to the next one.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

KAKAO_LOCAL_API = "https://dapi.kakao.com/v2/local"
OPENWEATHER_GEO_API = "https://api.openweathermap.org/geo/1.0"

#: Returned by coord_to_name when every provider failed.
DEFAULT_PLACE_NAME = "현재 위치"

#: Kakao returns short province names; expand to the official form.
REGION_1_DISPLAY_NAMES: dict[str, str] = {
    "서울": "서울특별시",
    "부산": "부산광역시",
    "대구": "대구광역시",
    "인천": "인천광역시",
    "광주": "광주광역시",
    "대전": "대전광역시",
    "울산": "울산광역시",
    "세종": "세종특별자치시",
    "경기": "경기도",
    "강원": "강원특별자치도",
    "충북": "충청북도",
    "충남": "충청남도",
    "전북": "전북특별자치도",
    "전남": "전라남도",
    "경북": "경상북도",
    "경남": "경상남도",
    "제주": "제주특별자치도",
}

T = TypeVar("T")
I = TypeVar("I")  # noqa: E741


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one provider attempt.

    Three states: found (``value``), empty (neither), failed (``error``).
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @classmethod
    def found(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def empty(cls) -> Outcome[T]:
        return cls()

    @classmethod
    def failed(cls, error: str) -> Outcome[T]:
        return cls(error=error)


Provider = Callable[[I], Awaitable[Outcome[T]]]


def provider_name(provider: Provider[I, T]) -> str:
    return getattr(provider, "name", type(provider).__name__)


async def call_provider(provider: Provider[I, T], value: I) -> Outcome[T]:
    """Invoke ``provider``, reporting anything it raises as a failed ``Outcome``."""
    try:
        return await provider(value)
    except Exception as exc:
        logger.exception("Geocoding provider %s raised", provider_name(provider))
        return Outcome.failed(f"unexpected error: {exc!r}")


async def run_chain(providers: Sequence[Provider[I, T]], value: I, default: T) -> T:
    """Try ``providers`` in order and return the first found value, else ``default``."""
    for provider in providers:
        outcome = await call_provider(provider, value)
        if outcome.ok:
            return outcome.value  # type: ignore[return-value]
        name = provider_name(provider)
        if outcome.error is not None:
            logger.warning("Geocoding provider %s failed: %s", name, outcome.error)
        else:
            logger.info("Geocoding provider %s found no match", name)
    return default
