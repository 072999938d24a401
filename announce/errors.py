"""Exceptions raised by the announce service"""


class AnnounceError(Exception):
    """Base class for announce service errors"""


class ConfigurationError(AnnounceError, ValueError):
    """
    Invalid announce configuration.

    Raised at construction time (empty discovery host list, unparseable
    values). Fatal to startup, never retried.
    """
