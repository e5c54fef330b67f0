"""Cookie options: the attribute set of a cookie write, plus read options.

Both are frozen dataclasses. Override what you need::

    opts = CookieOptions(path="/app", max_age=3600, same_site=SameSite.LAX)
    opts = replace(opts, secure=True)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from datetime import UTC, datetime
from enum import Enum
from typing import TypeVar

from crumbs.errors import InvalidOptionError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
"""``Expires`` value used for removals."""


class SameSite(Enum):
    """Values of the ``SameSite`` attribute."""

    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"


class Priority(Enum):
    """Values of the ``Priority`` attribute."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Unset(Enum):
    """Marker for an option the caller did not pass."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET

# Values used for options that are still UNSET when a cookie is serialized.
_FALLBACKS: dict[str, object] = {
    "path": "/",
    "domain": None,
    "expires": None,
    "max_age": None,
    "secure": False,
    "http_only": False,
    "same_site": None,
    "partitioned": False,
    "priority": None,
}


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes attached to a cookie write.

    Every field defaults to ``UNSET``. ``resolved()`` fills the gaps
    with ``path="/"`` and no other attributes. Explicit values, even
    ones equal to those fallbacks, win when options are merged.

    Unset attributes are left out of the serialized string entirely.
    When both ``max_age`` and ``expires`` are set, both are emitted and
    the receiving agent gives ``Max-Age`` precedence.

    ``http_only`` can only be honored on responses. A browser-mode store
    rejects it.
    """

    path: str | None | Unset = UNSET
    domain: str | None | Unset = UNSET
    expires: datetime | None | Unset = UNSET
    max_age: int | float | None | Unset = UNSET
    secure: bool | Unset = UNSET
    http_only: bool | Unset = UNSET
    same_site: SameSite | str | None | Unset = UNSET
    partitioned: bool | Unset = UNSET
    priority: Priority | str | None | Unset = UNSET

    def merge(self, other: CookieOptions | None) -> CookieOptions:
        """Return these options overlaid with the fields *other* sets.

        Only ``UNSET`` fields of *other* keep the value here, so
        ``CookieOptions(path="/", secure=False)`` overrides store
        defaults of ``path="/app", secure=True``.
        """
        if other is None:
            return self
        changes = {}
        for f in fields(other):
            value = getattr(other, f.name)
            if value is not UNSET:
                changes[f.name] = value
        return replace(self, **changes)

    def resolved(self) -> CookieOptions:
        """Return a copy with every ``UNSET`` field replaced by its fallback."""
        changes = {}
        for f in fields(self):
            if getattr(self, f.name) is UNSET:
                changes[f.name] = _FALLBACKS[f.name]
        return replace(self, **changes)

    def for_removal(self) -> CookieOptions:
        """Same path and domain, already expired."""
        return replace(self, max_age=0, expires=EPOCH)


@dataclass(frozen=True, slots=True)
class ReadOptions:
    """Options for ``CookieStore.get`` and ``CookieStore.get_all``.

    ``parse_json`` decodes values that look like JSON objects or arrays.
    Values that fail to decode are returned as the raw string.
    """

    parse_json: bool = False


# -- Validation --


E = TypeVar("E", bound=Enum)


def _coerce_enum(enum: type[E], value: E | str, attribute: str) -> E:
    if isinstance(value, enum):
        return value
    if isinstance(value, str):
        for member in enum:
            if member.value.lower() == value.lower():
                return member
    allowed = ", ".join(m.value for m in enum)
    msg = f"Invalid {attribute} value {value!r}. Expected one of: {allowed}"
    raise InvalidOptionError(msg)


def coerce_same_site(value: SameSite | str | None) -> SameSite | None:
    """Normalize a ``same_site`` option, accepting case-insensitive strings."""
    if value is None:
        return None
    return _coerce_enum(SameSite, value, "SameSite")


def coerce_priority(value: Priority | str | None) -> Priority | None:
    """Normalize a ``priority`` option, accepting case-insensitive strings."""
    if value is None:
        return None
    return _coerce_enum(Priority, value, "Priority")


def coerce_max_age(value: int | float | None) -> int | None:
    """Return *value* floored to whole seconds.

    Booleans, non-numbers, NaN and infinities are rejected.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"max_age must be a number of seconds, got {value!r}"
        raise InvalidOptionError(msg)
    if not math.isfinite(value):
        msg = f"max_age must be finite, got {value!r}"
        raise InvalidOptionError(msg)
    return math.floor(value)


def coerce_expires(value: datetime | None) -> datetime | None:
    """Return *value* as an aware UTC datetime. Naive values are taken as UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        msg = f"expires must be a datetime, got {type(value).__name__}"
        raise InvalidOptionError(msg)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
