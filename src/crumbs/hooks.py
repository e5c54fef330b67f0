"""Server-side mutation hooks.

On the server there is no ambient jar, so a store reports each write
through hooks and the caller attaches the attribute string to its
response. Hooks are any object with ``on_set`` and ``on_remove``
attributes, each either ``None`` or a callable::

    def on_set(name: str, attribute_string: str) -> None: ...

``CookieHooks`` holds two plain callables. ``SetCookieCollector`` is a
ready-made hooks object that gathers ``Set-Cookie`` header pairs.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

CookieCallback: TypeAlias = Callable[[str, str], object]


@dataclass(frozen=True, slots=True)
class CookieHooks:
    """A pair of optional callbacks, called as ``(name, attribute_string)``."""

    on_set: CookieCallback | None = None
    on_remove: CookieCallback | None = None


@dataclass(slots=True)
class SetCookieCollector:
    """Collects one ``("set-cookie", value)`` pair per store mutation.

    Usage::

        collector = SetCookieCollector()
        store = CookieStore(request_headers.get("cookie", ""), collector)
        store.set("theme", "dark")
        response_headers.extend(collector.headers)

    Each mutation needs its own header line, so pairs are appended,
    never merged.
    """

    headers: list[tuple[str, str]] = field(default_factory=list)

    def on_set(self, name: str, attribute_string: str) -> None:
        self.headers.append(("set-cookie", attribute_string))

    def on_remove(self, name: str, attribute_string: str) -> None:
        self.headers.append(("set-cookie", attribute_string))

    def values(self) -> list[str]:
        """Return just the attribute strings, in mutation order."""
        return [value for _, value in self.headers]
