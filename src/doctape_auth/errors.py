"""Errors raised by the doctape auth package."""


class DoctapeConfigError(ValueError):
    """A required strategy option is missing or empty."""
