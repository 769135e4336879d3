"""Exceptions raised by flowsketch."""


class FlowsketchError(Exception):
    """Base class for flowsketch errors."""

    pass


class ConfigurationError(FlowsketchError, ValueError):
    """Raised when a converter or layout component is given invalid settings."""

    pass


class StorageError(FlowsketchError):
    """Raised when a stored graph cannot be read or written."""

    pass
