"""Exceptions raised by superjson."""


class SuperJsonError(Exception):
    """Base exception for superjson errors."""

    pass


class ConfigurationError(SuperJsonError, ValueError):
    """Raised when a handler, marker or configuration is invalid.

    Configuration errors are raised while a codec is being built or a
    serializer is being installed. They are meant to be fixed by the
    integrator, not caught.
    """

    pass


class EncodingError(SuperJsonError, TypeError):
    """Raised when a value cannot be encoded.

    Either a handler's ``serialize`` returned something other than a list or
    tuple, or the JSON serializer rejected part of the tree.
    """

    pass


class UnsupportedValueError(SuperJsonError, TypeError):
    """Raised by a handler that claims a value it cannot serialize."""

    pass
