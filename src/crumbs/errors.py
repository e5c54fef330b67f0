"""Crumbs exception hierarchy.

Shared by the codec and the store so callers catch the same types
whichever mode a store runs in.
"""


class CookieError(Exception):
    """Base for all crumbs-specific errors."""


class CookieEnvironmentError(CookieError):
    """Raised when a browser-mode store is given a cookie source or hooks.

    The browser reads its cookies from the live jar. Passing a header
    or mapping would shadow it with a stale snapshot.
    """


class MissingSourceError(CookieError):
    """Raised when a server-mode store is created without a cookie source."""


class InvalidOptionError(CookieError, ValueError):
    """A cookie name or option value violates the wire format.

    Fatal to the call that raised it only. The store stays usable.
    """
