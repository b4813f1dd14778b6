"""Object names, invocation aliases, and standard horizon angles."""

import math

from calcelestial.models import CelestialObject

# Standard horizons (degrees). The solar one accounts for refraction and the
# semi-diameter of the disc, about 50 arc-minutes below the geometric horizon.
SOLAR_STANDARD_HORIZON = -0.8333
CIVIL_HORIZON = -6.0
NAUTIC_HORIZON = -12.0
ASTRONOMICAL_HORIZON = -18.0

HORIZON_KEYWORDS: dict[str, float] = {
    "civil": CIVIL_HORIZON,
    "nautic": NAUTIC_HORIZON,
    "astronomical": ASTRONOMICAL_HORIZON,
}

# Names accepted by --object, and aliases a wrapper script or symlink may be
# invoked as. Keys are lower case.
_NAMES: dict[str, CelestialObject] = {obj.value: obj for obj in CelestialObject}
_ALIASES: dict[str, CelestialObject] = {
    "sunrise": CelestialObject.SUN,
    "sunset": CelestialObject.SUN,
    "moonrise": CelestialObject.MOON,
    "moonset": CelestialObject.MOON,
}

# Ephemeris segment names. Outer planets are only available as barycenters in DE421.
SKYFIELD_NAMES: dict[CelestialObject, str] = {
    CelestialObject.SUN: "sun",
    CelestialObject.MOON: "moon",
    CelestialObject.MERCURY: "mercury",
    CelestialObject.VENUS: "venus",
    CelestialObject.MARS: "mars",
    CelestialObject.JUPITER: "jupiter barycenter",
    CelestialObject.SATURN: "saturn barycenter",
    CelestialObject.URANUS: "uranus barycenter",
    CelestialObject.NEPTUNE: "neptune barycenter",
    CelestialObject.PLUTO: "pluto barycenter",
}


def object_from_name(name: str | None, aliases: bool = True) -> CelestialObject | None:
    """Look up an object by name (case-insensitive).

    Args:
        name: Object name ("moon") or, with aliases enabled, an invocation
            alias such as "sunrise".
        aliases: Whether the alias table is consulted as well.

    Returns:
        The matching CelestialObject, or None if the name is unknown.
    """
    if not name:
        return None
    key = name.strip().lower()
    if key in _NAMES:
        return _NAMES[key]
    if aliases:
        return _ALIASES.get(key)
    return None


def horizon_from_name(value: str) -> float:
    """Resolve a twilight keyword or a numeric horizon in degrees.

    Raises:
        ValueError: If value is neither a keyword nor a finite number.
    """
    if value in HORIZON_KEYWORDS:
        return HORIZON_KEYWORDS[value]
    horizon = float(value)
    if not math.isfinite(horizon):
        raise ValueError(f"horizon must be finite: {value}")
    return horizon
