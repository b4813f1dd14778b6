"""Shared stub engines for CLI tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from calcelestial.models import Coordinates, RiseSetTransit

RISE = datetime(2023, 6, 21, 2, 43, 0, tzinfo=timezone.utc)
TRANSIT = datetime(2023, 6, 21, 11, 7, 0, tzinfo=timezone.utc)
SET = datetime(2023, 6, 21, 19, 33, 0, tzinfo=timezone.utc)

COORDS = Coordinates(
    alt=61.0, az=180.5, ra=6.0, dec=23.44, distance=1.016, jd=2460116.963
)


class StubEngine:
    """Records calls and returns canned rise/set/transit and positions."""

    def __init__(self, rst: RiseSetTransit | None = None) -> None:
        self.rst = rst or RiseSetTransit(rise=RISE, set=SET, transit=TRANSIT)
        self.rst_calls: list[tuple[Any, ...]] = []
        self.position_calls: list[tuple[Any, ...]] = []

    def rise_set_transit(  # type: ignore[no-untyped-def]
        self, obj, instant, horizon, position, tz
    ):
        self.rst_calls.append((obj, instant, horizon, position, tz))
        return self.rst

    def position(self, obj, instant, position):  # type: ignore[no-untyped-def]
        self.position_calls.append((obj, instant, position))
        return COORDS

    def kwargs(self) -> dict[str, Any]:
        return {
            "rise_set_transit": self.rise_set_transit,
            "position_of": self.position,
        }


@pytest.fixture
def engine() -> StubEngine:
    return StubEngine()


@pytest.fixture
def circumpolar_engine() -> StubEngine:
    return StubEngine(
        RiseSetTransit(rise=None, set=None, transit=TRANSIT, circumpolar=True)
    )


@pytest.fixture(autouse=True)
def _no_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CALCELESTIAL_DATA",
        "CALCELESTIAL_EPHEMERIS",
        "CALCELESTIAL_GEONAMES_USERNAME",
        "CALCELESTIAL_USER_AGENT",
        "CALCELESTIAL_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
