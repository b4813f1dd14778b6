"""calcelestial: rise, set, transit and position of the sun, moon and planets."""

__version__ = "0.9.0"
