"""CookieStore: one cookie API for browser and server code.

The mode is picked once, at construction, and never changes:

- **Browser** (an ambient jar is available): every read parses the live
  cookie string, every write goes straight to the jar. Nothing is
  cached, because other scripts on the page may change cookies at any
  time.
- **Server** (no ambient jar): cookies come from the request's
  ``Cookie`` header or an already-parsed mapping. Writes update an
  in-memory snapshot and are reported through hooks, which the caller
  wires onto the response's ``Set-Cookie`` headers.

Usage on the server::

    collector = SetCookieCollector()
    store = CookieStore(request.headers.get("cookie", ""), collector)
    store.set("theme", "dark", CookieOptions(max_age=3600))
    store.get("theme")  # "dark"

Usage in the browser::

    store = CookieStore()
    store.get("theme")

A store is scoped to one page or one request. It is not meant to be
shared across requests.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeAlias

from crumbs.codec import decode_value, encode_value, parse_cookies, serialize_cookie, serialize_removal
from crumbs.errors import CookieEnvironmentError, InvalidOptionError, MissingSourceError
from crumbs.jar import CookieJar, ambient_jar
from crumbs.options import CookieOptions, ReadOptions

logger = logging.getLogger("crumbs.store")

CookieSource: TypeAlias = str | Mapping[str, str]


class Mode(Enum):
    """Where a store reads and writes cookies."""

    BROWSER = "browser"
    SERVER = "server"


class CookieStore:
    """Read and write cookies with the same API in the browser and on the server.

    Args:
        source: Server only. The raw ``Cookie`` header, or a mapping of
            already-parsed name-value pairs (copied without decoding,
            values converted with ``str()``).
        hooks: Server only. An object with ``on_set`` and ``on_remove``
            callables, e.g. ``CookieHooks`` or ``SetCookieCollector``.
            Without hooks, mutations only touch the in-memory snapshot.
        jar: Use this jar instead of detecting the ambient one. Forces
            browser mode. Meant for tests.
        defaults: Options applied under the per-call options of every
            ``set`` and ``remove``.

    Raises:
        CookieEnvironmentError: In browser mode, if ``source`` or
            ``hooks`` is given.
        MissingSourceError: In server mode, if ``source`` is missing.
    """

    __slots__ = ("_cookies", "_defaults", "_hooks", "_jar", "_mode")

    def __init__(
        self,
        source: CookieSource | None = None,
        hooks: Any = None,
        *,
        jar: CookieJar | None = None,
        defaults: CookieOptions | None = None,
    ) -> None:
        if jar is None:
            jar = ambient_jar()

        self._defaults = defaults or CookieOptions()
        self._hooks = hooks
        self._jar = jar
        self._cookies: dict[str, str] = {}

        if jar is not None:
            if source is not None or hooks is not None:
                msg = "The browser should not provide the cookies"
                raise CookieEnvironmentError(msg)
            self._mode = Mode.BROWSER
        else:
            if source is None:
                msg = "Missing the cookie header or object"
                raise MissingSourceError(msg)
            self._mode = Mode.SERVER
            self._cookies = _load_source(source)

        logger.debug("Cookie store created in %s mode", self._mode.value)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_browser(self) -> bool:
        return self._mode is Mode.BROWSER

    # -- Reads --

    def _snapshot(self) -> dict[str, str]:
        if self._jar is not None:
            return parse_cookies(self._jar.read())
        return self._cookies

    def get(self, name: str, options: ReadOptions | None = None) -> Any:
        """Return the value of cookie *name*, or ``None`` if it is not set."""
        raw = self._snapshot().get(name)
        if raw is None:
            return None
        return decode_value(raw, options)

    def get_all(self, options: ReadOptions | None = None) -> dict[str, Any]:
        """Return every cookie as a new dict. Changing it does not touch the store."""
        return {name: decode_value(raw, options) for name, raw in self._snapshot().items()}

    # -- Writes --

    def _resolve(self, options: CookieOptions | None) -> CookieOptions:
        opts = self._defaults.merge(options).resolved()
        if self._mode is Mode.BROWSER and opts.http_only:
            msg = "http_only cannot be set from the browser"
            raise InvalidOptionError(msg)
        return opts

    def set(self, name: str, value: Any, options: CookieOptions | None = None) -> None:
        """Set cookie *name* to *value*.

        Non-string values are stored as JSON. Raises
        ``InvalidOptionError`` before any change if the name or an
        option is invalid.
        """
        opts = self._resolve(options)
        attribute_string = serialize_cookie(name, value, opts)

        if self._jar is not None:
            self._jar.write(attribute_string)
            return

        self._cookies[name] = encode_value(value)
        self._notify("on_set", name, attribute_string)

    def remove(self, name: str, options: CookieOptions | None = None) -> None:
        """Delete cookie *name*. Removing a cookie that is not set is a no-op.

        ``path`` and ``domain`` must match the ones used to set the
        cookie, or the receiving agent keeps it.
        """
        opts = self._resolve(options)
        attribute_string = serialize_removal(name, opts)

        if self._jar is not None:
            self._jar.write(attribute_string)
            return

        self._cookies.pop(name, None)
        self._notify("on_remove", name, attribute_string)

    def _notify(self, hook: str, name: str, attribute_string: str) -> None:
        callback = getattr(self._hooks, hook, None)
        if callback is None:
            return
        logger.debug("Dispatching %s for cookie %r", hook, name)
        callback(name, attribute_string)


def _load_source(source: CookieSource) -> dict[str, str]:
    if isinstance(source, str):
        return parse_cookies(source)
    if isinstance(source, Mapping):
        return {str(name): str(value) for name, value in source.items()}
    msg = f"Cookie source must be a header string or a mapping, got {type(source).__name__}"
    raise TypeError(msg)
