"""Custom exceptions for world generation."""


class WorldGenError(Exception):
    """Base exception for world generation errors."""

    pass


class ConfigurationError(WorldGenError):
    """Raised when a generator configuration cannot produce a valid world."""

    pass
