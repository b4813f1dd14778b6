"""Place-name lookup: GeoNames when configured, Nominatim (OpenStreetMap) otherwise."""

import logging

import httpx

from calcelestial import config
from calcelestial.models import ObserverPosition

logger = logging.getLogger(__name__)

GEONAMES_URL = "http://api.geonames.org/searchJSON"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeocodingError(Exception):
    """Geocoder call failure."""


def _geocode_geonames(query: str, username: str) -> tuple[float, float, str] | None:
    """Single GeoNames search. Returns None on no match, raises on API error."""
    params = {"q": query, "maxRows": 1, "username": username}
    resp = httpx.get(GEONAMES_URL, params=params, timeout=10)
    resp.raise_for_status()
    data = resp.json()
    if "status" in data:
        # GeoNames reports quota and credential problems with HTTP 200
        raise GeocodingError(f"geonames error: {data['status'].get('message')}")
    results = data.get("geonames") or []
    if not results:
        return None
    r = results[0]
    display = ", ".join(p for p in (r.get("name"), r.get("countryName")) if p)
    return float(r["lat"]), float(r["lng"]), display or query


def _geocode_nominatim(query: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": query, "format": "json", "limit": 1}
    headers = {"User-Agent": config.get_user_agent()}
    resp = httpx.get(NOMINATIM_URL, params=params, headers=headers, timeout=10)
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def geocode_place(query: str) -> ObserverPosition:
    """Resolve a place name to an observer position.

    Tries GeoNames first when CALCELESTIAL_GEONAMES_USERNAME is set and falls
    back to Nominatim if GeoNames fails or finds nothing.

    Args:
        query: Free-form place name ("Berlin", "Aachen, Germany").

    Returns:
        ObserverPosition with lat/lng and the geocoder's display name.

    Raises:
        GeocodingError: On API or transport error, or when the place cannot be found.
    """
    result: tuple[float, float, str] | None = None

    username = config.get_geonames_username()
    if username:
        try:
            result = _geocode_geonames(query, username)
        except (GeocodingError, httpx.HTTPError) as e:
            logger.debug("geonames lookup failed, falling back to nominatim: %s", e)

    if result is None:
        try:
            result = _geocode_nominatim(query)
        except httpx.HTTPError as e:
            raise GeocodingError(f"nominatim error: {e}") from e
        if result is None:
            raise GeocodingError(f"Location not found: {query}")

    lat, lng, display = result
    logger.debug("geocoded %r to %f, %f (%s)", query, lat, lng, display)
    return ObserverPosition(lat=lat, lng=lng, name=display)
