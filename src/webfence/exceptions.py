"""
Exception types for webfence.
"""


class WebfenceError(Exception):
    """Base class for webfence errors."""

    pass


class ConfigError(WebfenceError):
    """Configuration file is malformed."""

    pass


class FilterListError(WebfenceError):
    """A filter list could not be built or read."""

    pass


class InvalidFragmentError(FilterListError, ValueError):
    """A filter fragment is empty or not a string.

    An empty fragment is a substring of every URL, so accepting one would
    block all traffic.
    """

    def __init__(self, fragment: object) -> None:
        self.fragment = fragment
        super().__init__(f"Invalid filter fragment: {fragment!r}")
