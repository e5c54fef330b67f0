"""Crumbs — one cookie API for the browser and the server.

In the browser (Pyodide, PyScript) a store reads and writes the live
``document.cookie``. On the server it reads the request's ``Cookie``
header and reports writes through hooks, so they can be sent back as
``Set-Cookie`` headers.

Basic usage::

    from crumbs import CookieStore, SetCookieCollector

    collector = SetCookieCollector()
    store = CookieStore("theme=dark; lang=en", collector)
    store.get("theme")  # "dark"
    store.set("lang", "fr")
    collector.headers  # [("set-cookie", "lang=fr; Path=/")]
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CookieEnvironmentError",
    "CookieError",
    "CookieHooks",
    "CookieJar",
    "CookieOptions",
    "CookieStore",
    "UNSET",
    "InvalidOptionError",
    "MemoryCookieJar",
    "MissingSourceError",
    "Mode",
    "Priority",
    "ReadOptions",
    "SameSite",
    "SetCookieCollector",
    "parse_cookies",
    "serialize_cookie",
    "serialize_removal",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import crumbs`` fast while providing a clean top-level API.
    """
    if name in ("CookieStore", "Mode"):
        from crumbs import store as _store

        return getattr(_store, name)

    if name in ("CookieOptions", "Priority", "ReadOptions", "SameSite", "UNSET"):
        from crumbs import options as _options

        return getattr(_options, name)

    if name in ("parse_cookies", "serialize_cookie", "serialize_removal"):
        from crumbs import codec as _codec

        return getattr(_codec, name)

    if name in ("CookieJar", "MemoryCookieJar"):
        from crumbs import jar as _jar

        return getattr(_jar, name)

    if name in ("CookieHooks", "SetCookieCollector"):
        from crumbs import hooks as _hooks

        return getattr(_hooks, name)

    if name in ("CookieEnvironmentError", "CookieError", "InvalidOptionError", "MissingSourceError"):
        from crumbs import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
