"""Output formatting: strftime templates with § placeholders for object coordinates."""

import re
from datetime import timedelta, timezone, tzinfo

from pytz import UnknownTimeZoneError
from pytz import timezone as pytz_timezone
from timezonefinder import TimezoneFinder

from calcelestial.models import ObjectDetails, ObserverPosition

DEFAULT_TEMPLATE = "%Y-%m-%d %H:%M:%S"

_PLACEHOLDER = re.compile(r"§([a-z]+)")


def _fields(details: ObjectDetails) -> dict[str, float | str | None]:
    c = details.coordinates
    return {
        "az": c.az if c else None,
        "alt": c.alt if c else None,
        "ra": c.ra if c else None,
        "dec": c.dec if c else None,
        "dist": c.distance if c else None,
        "jd": c.jd if c else None,
        "lat": details.position.lat,
        "lon": details.position.lng,
        "place": details.position.name,
        "obj": details.obj.value,
    }


def format_result(template: str, details: ObjectDetails, tz: tzinfo | None) -> str:
    """Render details through template.

    § placeholders (§az, §alt, §ra, §dec, §dist, §jd, §lat, §lon, §place,
    §obj) are replaced first; the rest of the template is handed to strftime
    with the selected instant converted to tz. Unknown placeholders are kept as-is.

    Args:
        template: strftime pattern, e.g. "%H:%M §az".
        details: Selected instant, observer position, and coordinates.
        tz: Output timezone (None = system local time).

    Returns:
        The formatted line (without trailing newline).
    """
    fields = _fields(details)

    def _sub(match: re.Match[str]) -> str:
        value = fields.get(match.group(1))
        if value is None:
            return match.group(0)
        if isinstance(value, float):
            return f"{value:.6f}"
        # Literal text must survive strftime
        return value.replace("%", "%%")

    expanded = _PLACEHOLDER.sub(_sub, template)
    return details.instant.astimezone(tz).strftime(expanded)


def parse_timezone(value: str, position: ObserverPosition | None = None) -> tzinfo:
    """Resolve a --timezone argument.

    Accepts signed integer hours ("2", "-5"), "auto" for the zone at the
    observer position, or an IANA zone name ("Europe/Berlin").

    Raises:
        ValueError: If the value cannot be resolved to a timezone.
    """
    value = value.strip()
    try:
        hours = int(value)
    except ValueError:
        pass
    else:
        if abs(hours) > 14:
            raise ValueError(f"offset out of range: {hours}")
        return timezone(timedelta(hours=hours))

    if value == "auto":
        if position is None or not position.in_range():
            raise ValueError("auto timezone needs a valid position")
        tz_str = TimezoneFinder().timezone_at(lat=position.lat, lng=position.lng)
        if tz_str is None:
            raise ValueError(
                f"Timezone not found: lat={position.lat}, lng={position.lng}"
            )
        value = tz_str

    try:
        return pytz_timezone(value)
    except UnknownTimeZoneError as e:
        raise ValueError(f"unknown timezone: {value}") from e
