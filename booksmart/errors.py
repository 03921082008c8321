"""
Exceptions raised by the patcher.
"""


class BookSmartError(Exception):
    """Base class for all patcher errors."""


class ConfigurationError(BookSmartError):
    """A settings value is outside the set the patcher understands."""
