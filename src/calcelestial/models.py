"""Data model definitions: boundaries between input, compute, and format layers."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum


class CelestialObject(Enum):
    """Objects the ephemeris can locate."""

    SUN = "sun"
    MOON = "moon"
    MERCURY = "mercury"
    VENUS = "venus"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    PLUTO = "pluto"


class Moment(Enum):
    """Which instant the position is reported for."""

    NOW = "now"
    RISE = "rise"
    SET = "set"
    TRANSIT = "transit"


@dataclass(frozen=True)
class ObserverPosition:
    """Geographic position of the observer. Components stay None until resolved."""

    lat: float | None = None  # Latitude (decimal degrees, north positive)
    lng: float | None = None  # Longitude (decimal degrees, east positive)
    name: str | None = None  # Display name returned by the geocoder

    @property
    def is_set(self) -> bool:
        return self.lat is not None and self.lng is not None

    def in_range(self) -> bool:
        # NaN fails every comparison, so it is out of range
        return (
            self.is_set
            and -90 <= self.lat <= 90  # type: ignore[operator]
            and -180 <= self.lng <= 180  # type: ignore[operator]
        )


@dataclass(frozen=True)
class Request:
    """Validated command-line input. Input to the rise/set/transit computation."""

    obj: CelestialObject
    horizon: float  # Rise/set threshold (degrees, negative = below horizon)
    instant: datetime  # Reference instant (UTC, tz-aware)
    moment: Moment
    position: ObserverPosition
    tz: tzinfo | None  # Interprets --time and formats output; None = system local time
    template: str  # strftime pattern with optional § placeholders


@dataclass(frozen=True)
class RiseSetTransit:
    """Horizon crossings and meridian transit of one object on one day."""

    rise: datetime | None  # UTC
    set: datetime | None  # UTC
    transit: datetime | None  # UTC
    circumpolar: bool = False  # Neither rises nor sets that day


@dataclass(frozen=True)
class Coordinates:
    """Apparent topocentric coordinates of an object."""

    alt: float  # Altitude (degrees)
    az: float  # Azimuth (degrees, 0=N, 90=E)
    ra: float  # Right ascension, equinox of date (hours)
    dec: float  # Declination, equinox of date (degrees)
    distance: float  # Distance (au)
    jd: float  # Julian date (UT1) of the instant


@dataclass(frozen=True)
class ObjectDetails:
    """The sole input to the formatter. Fully computed state."""

    obj: CelestialObject
    instant: datetime  # Selected instant (UTC)
    position: ObserverPosition
    coordinates: Coordinates | None = None
