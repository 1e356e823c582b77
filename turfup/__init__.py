"""TurfUp: organize informal sports matches."""

__version__ = "0.1.0"
