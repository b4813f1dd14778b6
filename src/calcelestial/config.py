"""Configuration: data directory, ephemeris, and geocoder settings from environment."""

import os
from pathlib import Path

from calcelestial import __version__

DEFAULT_DATA_PATH = "~/.skyfield"
DEFAULT_EPHEMERIS = "de421.bsp"


def get_data_path() -> Path:
    """Return the skyfield download/cache directory (CALCELESTIAL_DATA or default)."""
    return Path(os.environ.get("CALCELESTIAL_DATA", DEFAULT_DATA_PATH)).expanduser()


def get_ephemeris_name() -> str:
    """Return the ephemeris file name (CALCELESTIAL_EPHEMERIS or de421.bsp)."""
    return os.environ.get("CALCELESTIAL_EPHEMERIS", DEFAULT_EPHEMERIS)


def get_geonames_username() -> str | None:
    """Return the geonames.org account name, or None when GeoNames is not configured."""
    return os.environ.get("CALCELESTIAL_GEONAMES_USERNAME") or None


def get_user_agent() -> str:
    """Return the User-Agent sent to Nominatim, whose usage policy requires one."""
    return os.environ.get("CALCELESTIAL_USER_AGENT", f"calcelestial/{__version__}")


def get_log_level() -> str | None:
    """Return the CALCELESTIAL_LOG level name if it is a valid one."""
    level = os.environ.get("CALCELESTIAL_LOG", "").strip().upper()
    if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return level
    return None
