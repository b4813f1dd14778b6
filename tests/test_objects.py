"""Tests for object lookup and horizon keywords."""

from __future__ import annotations

import pytest

from calcelestial.models import CelestialObject
from calcelestial.objects import (
    ASTRONOMICAL_HORIZON,
    CIVIL_HORIZON,
    NAUTIC_HORIZON,
    SKYFIELD_NAMES,
    horizon_from_name,
    object_from_name,
)


@pytest.mark.parametrize(
    ("keyword", "expected"),
    [
        ("civil", CIVIL_HORIZON),
        ("nautic", NAUTIC_HORIZON),
        ("astronomical", ASTRONOMICAL_HORIZON),
    ],
)
def test_horizon_keywords(keyword: str, expected: float) -> None:
    """Twilight keywords map to the fixed standard angles."""
    assert horizon_from_name(keyword) == expected


def test_horizon_constants() -> None:
    assert (CIVIL_HORIZON, NAUTIC_HORIZON, ASTRONOMICAL_HORIZON) == (-6.0, -12.0, -18.0)


@pytest.mark.parametrize(("text", "expected"), [("-3.5", -3.5), ("0", 0.0), ("2", 2.0)])
def test_horizon_numeric(text: str, expected: float) -> None:
    assert horizon_from_name(text) == expected


@pytest.mark.parametrize(
    "text", ["dusk", "", "Civil", "12deg", "nan", "inf", "-inf", "NaN"]
)
def test_horizon_invalid(text: str) -> None:
    """Anything that is neither keyword nor finite number is rejected."""
    with pytest.raises(ValueError):
        horizon_from_name(text)


def test_object_from_name_is_case_insensitive() -> None:
    assert object_from_name("Moon") is CelestialObject.MOON
    assert object_from_name(" uranus ") is CelestialObject.URANUS


def test_object_from_name_aliases() -> None:
    """Invocation aliases resolve only when the alias table is enabled."""
    assert object_from_name("sunrise") is CelestialObject.SUN
    assert object_from_name("moonset") is CelestialObject.MOON
    assert object_from_name("sunrise", aliases=False) is None


@pytest.mark.parametrize("name", [None, "", "calcelestial", "vulcan"])
def test_object_from_name_unknown(name: str | None) -> None:
    assert object_from_name(name) is None


def test_every_object_has_an_ephemeris_name() -> None:
    assert set(SKYFIELD_NAMES) == set(CelestialObject)
