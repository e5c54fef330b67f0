"""Cookie jars: the ambient cookie string a browser-mode store reads and writes.

A jar is any object with ``read()`` and ``write()``. No base class
required. The store checks the shape, not the lineage.

``DocumentCookieJar`` wraps ``document.cookie`` when Python runs in a
browser (Pyodide, PyScript). ``MemoryCookieJar`` applies the same write
semantics in-process, for tests and for hosts with no DOM.
"""

import logging
import sys
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any, Protocol, TypeAlias

logger = logging.getLogger("crumbs.jar")

Clock: TypeAlias = Callable[[], datetime]


class CookieJar(Protocol):
    """Protocol for the live cookie string of a browsing context.

    ``read()`` returns ``name=value; name2=value2``. ``write()`` takes a
    single attribute string and merges it the way ``document.cookie``
    assignment does.
    """

    def read(self) -> str: ...

    def write(self, attribute_string: str) -> None: ...


class DocumentCookieJar:
    """``document.cookie`` of the hosting page."""

    __slots__ = ("_document",)

    def __init__(self, document: Any) -> None:
        self._document = document

    def read(self) -> str:
        return str(self._document.cookie or "")

    def write(self, attribute_string: str) -> None:
        self._document.cookie = attribute_string


def ambient_jar() -> CookieJar | None:
    """Return the page's cookie jar, or ``None`` outside a browser.

    Only an Emscripten build with a ``document`` object qualifies. Web
    workers run Pyodide too but have no cookie jar.
    """
    if sys.platform != "emscripten":
        return None
    try:
        import js  # type: ignore[import-not-found]
    except ImportError:
        return None
    document = getattr(js, "document", None)
    if document is None:
        return None
    return DocumentCookieJar(document)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_expires(value: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


class MemoryCookieJar:
    """In-memory jar with browser ``document.cookie`` write semantics.

    - A write replaces any cookie with the same name, domain and path.
    - ``Max-Age=0`` (or negative) and a past ``Expires`` delete it.
    - ``Max-Age`` takes precedence over ``Expires``.
    - Writes carrying ``HttpOnly`` are ignored, as scripts cannot set them.

    Usage::

        jar = MemoryCookieJar("theme=dark")
        store = CookieStore(jar=jar)
        jar.write("lang=en")
        store.get("lang")  # "en"
    """

    __slots__ = ("_clock", "_entries")

    def __init__(self, initial: str = "", *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or _utcnow
        # (name, domain, path) -> (raw value, expiry or None)
        self._entries: dict[tuple[str, str, str], tuple[str, datetime | None]] = {}
        for pair in initial.split(";"):
            if pair.strip():
                self.write(pair.strip())

    def read(self) -> str:
        now = self._clock()
        live = []
        for key, (value, expiry) in list(self._entries.items()):
            if expiry is not None and expiry <= now:
                del self._entries[key]
                continue
            live.append(f"{key[0]}={value}")
        return "; ".join(live)

    def write(self, attribute_string: str) -> None:
        head, *attributes = attribute_string.split(";")
        if "=" not in head:
            return
        name, _, value = head.partition("=")
        name = name.strip()
        if not name:
            return

        domain = ""
        path = "/"
        max_age: int | None = None
        expires: datetime | None = None
        for attribute in attributes:
            key, _, attr_value = attribute.strip().partition("=")
            key = key.strip().lower()
            attr_value = attr_value.strip()
            if key == "httponly":
                logger.debug("Ignoring HttpOnly write for %r", name)
                return
            if key == "domain":
                domain = attr_value.lstrip(".").lower()
            elif key == "path":
                path = attr_value or "/"
            elif key == "max-age":
                try:
                    max_age = int(attr_value)
                except ValueError:
                    continue
            elif key == "expires":
                expires = _parse_expires(attr_value)

        now = self._clock()
        expiry: datetime | None = None
        if max_age is not None:
            try:
                expiry = now + timedelta(seconds=max_age)
            except OverflowError:
                expiry = None
        elif expires is not None:
            expiry = expires

        key_tuple = (name, domain, path)
        if expiry is not None and expiry <= now:
            self._entries.pop(key_tuple, None)
            return
        self._entries[key_tuple] = (value.strip(), expiry)
