"""Cookie parsing and Set-Cookie serialization.

Consolidates the read side (``parse_cookies``, fed by a ``Cookie``
header or ``document.cookie``) and the write side (``serialize_cookie``
and ``serialize_removal``) in one module. Pure functions, no state.
"""

import json
from email.utils import format_datetime
from typing import Any
from urllib.parse import quote, unquote

from crumbs.errors import InvalidOptionError
from crumbs.options import (
    CookieOptions,
    ReadOptions,
    coerce_expires,
    coerce_max_age,
    coerce_priority,
    coerce_same_site,
)

# Characters left unescaped by JavaScript's encodeURIComponent, beyond
# the ones quote() never escapes.
_URI_COMPONENT_SAFE = "!*'()"

# Separators that would split the pair or the header around a name.
_NAME_FORBIDDEN = frozenset(";=")


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Names and values are percent-decoded, and one pair of double quotes
    around a value is removed. Pairs without ``=`` are skipped and the
    last duplicate wins. Returns an empty dict for empty or missing
    headers. Never raises.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" not in pair:
            continue
        key, _, value = pair.partition("=")
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[unquote(key)] = unquote(value)
    return cookies


def _is_control(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def validate_name(name: str) -> None:
    """Raise ``InvalidOptionError`` unless *name* is usable as a cookie name."""
    if not isinstance(name, str) or not name:
        msg = f"Cookie name must be a non-empty string, got {name!r}"
        raise InvalidOptionError(msg)
    for char in name:
        if char in _NAME_FORBIDDEN or _is_control(char):
            msg = f"Cookie name {name!r} contains forbidden character {char!r}"
            raise InvalidOptionError(msg)


def _check_attribute(attribute: str, value: str) -> str:
    if not isinstance(value, str):
        msg = f"{attribute} must be a string, got {type(value).__name__}"
        raise InvalidOptionError(msg)
    if ";" in value or any(_is_control(c) for c in value):
        msg = f"{attribute} value {value!r} contains ';' or a control character"
        raise InvalidOptionError(msg)
    return value


def _encode_component(what: str, text: str) -> str:
    try:
        return quote(text, safe=_URI_COMPONENT_SAFE)
    except UnicodeEncodeError as exc:
        msg = f"Cookie {what} {text!r} cannot be encoded as UTF-8"
        raise InvalidOptionError(msg) from exc


def encode_value(value: Any) -> str:
    """Return the string form of a cookie value.

    Strings pass through. Anything else (dicts, lists, numbers) is
    dumped as compact JSON so it can be read back with
    ``ReadOptions(parse_json=True)``.
    """
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(",", ":"))
    except TypeError as exc:
        msg = f"Cookie value of type {type(value).__name__} is not JSON serializable"
        raise InvalidOptionError(msg) from exc


def decode_value(raw: str, options: ReadOptions | None = None) -> Any:
    """Return *raw*, JSON-decoded when ``options.parse_json`` asks for it."""
    if options is None or not options.parse_json:
        return raw
    if not isinstance(raw, str) or not raw or raw[0] not in "{[":
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def serialize_cookie(name: str, value: Any, options: CookieOptions | None = None) -> str:
    """Serialize to a ``Set-Cookie`` style attribute string.

    Only attributes that are set appear in the output. Raises
    ``InvalidOptionError`` for a malformed name or option value.
    """
    validate_name(name)
    opts = (options or CookieOptions()).resolved()

    max_age = coerce_max_age(opts.max_age)
    expires = coerce_expires(opts.expires)
    same_site = coerce_same_site(opts.same_site)
    priority = coerce_priority(opts.priority)

    text = encode_value(value)
    parts = [f"{_encode_component('name', name)}={_encode_component('value', text)}"]
    if max_age is not None:
        parts.append(f"Max-Age={max_age}")
    if opts.domain:
        parts.append(f"Domain={_check_attribute('Domain', opts.domain)}")
    if opts.path:
        parts.append(f"Path={_check_attribute('Path', opts.path)}")
    if expires is not None:
        parts.append(f"Expires={format_datetime(expires, usegmt=True)}")
    if opts.http_only:
        parts.append("HttpOnly")
    if opts.secure:
        parts.append("Secure")
    if opts.partitioned:
        parts.append("Partitioned")
    if priority is not None:
        parts.append(f"Priority={priority.value}")
    if same_site is not None:
        parts.append(f"SameSite={same_site.value}")
    return "; ".join(parts)


def serialize_removal(name: str, options: CookieOptions | None = None) -> str:
    """Serialize an attribute string that makes the agent delete *name*.

    Emits an empty value with ``Max-Age=0`` and an epoch ``Expires``.
    ``path`` and ``domain`` must match the ones the cookie was set with,
    or the agent keeps the cookie.
    """
    return serialize_cookie(name, "", (options or CookieOptions()).for_removal())
