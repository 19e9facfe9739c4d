"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class StoreUnavailableError(UtilError):
    """The backing store could not be reached.

    Raised for connectivity failures only. Callers surface it as a generic
    failure and never leak the underlying driver message.
    """

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message)
