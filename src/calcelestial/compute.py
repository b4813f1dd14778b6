"""Astronomy computation layer: skyfield rise/set/transit search and positions."""

from datetime import date, datetime, timedelta, tzinfo
from functools import lru_cache
from importlib.metadata import version

from skyfield import almanac
from skyfield.api import Loader, wgs84

from calcelestial import config
from calcelestial.models import (
    CelestialObject,
    Coordinates,
    ObserverPosition,
    RiseSetTransit,
)
from calcelestial.objects import SKYFIELD_NAMES


@lru_cache(maxsize=1)
def _load():
    """Load timescale and ephemeris once per process (downloads on first use)."""
    loader = Loader(str(config.get_data_path()))
    return loader.timescale(), loader(config.get_ephemeris_name())


def engine_version() -> str:
    """Installed skyfield version."""
    return version("skyfield")


def _observer(eph, position: ObserverPosition):
    # earth + topos (not the bare topos) gives apparent, topocentric places
    return eph["earth"] + wgs84.latlon(
        latitude_degrees=position.lat, longitude_degrees=position.lng
    )


def _midnight(day: date, tz: tzinfo | None) -> datetime:
    """Aware local midnight starting day in tz (None = system local)."""
    naive = datetime(day.year, day.month, day.day)
    if tz is None:
        return naive.astimezone()
    if hasattr(tz, "localize"):
        # pytz zones need localize() for the correct DST offset
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def _day_window(instant: datetime, tz: tzinfo | None) -> tuple[datetime, datetime]:
    """Midnight to next midnight of the local day containing instant.

    Both ends are localized on their own, so DST change days span 23 or 25 hours.
    """
    day = instant.astimezone(tz).date()
    return _midnight(day, tz), _midnight(day + timedelta(days=1), tz)


def compute_rise_set_transit(
    obj: CelestialObject,
    instant: datetime,
    horizon: float,
    position: ObserverPosition,
    tz: tzinfo | None = None,
) -> RiseSetTransit:
    """Find rise, set, and upper transit of obj on the local day containing instant.

    Args:
        obj: Object to search for.
        instant: Reference instant (tz-aware); selects the calendar day.
        horizon: Altitude threshold for rise/set in degrees.
        position: Observer position (must be set).
        tz: Zone whose calendar day is searched (None = system local time).

    Returns:
        RiseSetTransit with UTC datetimes. circumpolar is True when the object
        neither rises nor sets during the day (always up or always down).
    """
    ts, eph = _load()
    start, end = _day_window(instant, tz)
    t0 = ts.from_datetime(start)
    t1 = ts.from_datetime(end)

    body = eph[SKYFIELD_NAMES[obj]]
    observer = _observer(eph, position)

    # flag=False marks the time of closest approach when no real crossing happened
    rise_times, rise_flags = almanac.find_risings(
        observer, body, t0, t1, horizon_degrees=horizon
    )
    set_times, set_flags = almanac.find_settings(
        observer, body, t0, t1, horizon_degrees=horizon
    )
    real_rises = [t for t, f in zip(rise_times, rise_flags) if f]
    real_sets = [t for t, f in zip(set_times, set_flags) if f]

    transits = almanac.find_transits(observer, body, t0, t1)

    return RiseSetTransit(
        rise=real_rises[0].utc_datetime() if real_rises else None,
        set=real_sets[0].utc_datetime() if real_sets else None,
        transit=transits[0].utc_datetime() if len(transits) else None,
        circumpolar=not real_rises and not real_sets,
    )


def compute_position(
    obj: CelestialObject,
    instant: datetime,
    position: ObserverPosition,
) -> Coordinates:
    """Compute apparent horizontal and equatorial coordinates of obj at instant."""
    ts, eph = _load()
    t = ts.from_datetime(instant)

    body = eph[SKYFIELD_NAMES[obj]]
    apparent = _observer(eph, position).at(t).observe(body).apparent()
    alt, az, distance = apparent.altaz()
    ra, dec, _ = apparent.radec("date")

    return Coordinates(
        alt=float(alt.degrees),
        az=float(az.degrees),
        ra=float(ra.hours),
        dec=float(dec.degrees),
        distance=float(distance.au),
        jd=float(t.ut1),
    )
