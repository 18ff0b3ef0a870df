"""Cookie parsing and Set-Cookie serialization.

Consolidates the read side (``parse_cookies``, used by the middleware)
and the write side (``serialize_cookie`` and ``SetCookie``, used by
``CookieJar``) in one module.

Values are percent-encoded on the way out and percent-decoded on the
way in, so any string survives a trip through the browser.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from email.utils import format_datetime
from typing import Literal, TypeAlias
from urllib.parse import quote, unquote

SameSite: TypeAlias = Literal["Strict", "Lax", "None"]

# Characters left alone by ``encodeURIComponent``, beyond quote()'s own
_SAFE = "!~*'()"


def parse_cookies(header: str | None) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers. Segments without
    ``=`` or with an empty name are skipped, and later duplicates win.
    Never raises: malformed percent escapes are kept as they are.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        cookies[key] = unquote(value.strip())
    return cookies


def format_http_date(value: datetime | float | int) -> str:
    """Format *value* as an RFC 7231 ``IMF-fixdate``.

    Numbers are Unix timestamps in seconds. Naive datetimes are taken
    as UTC.
    """
    if isinstance(value, datetime):
        moment = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    else:
        moment = datetime.fromtimestamp(value, tz=UTC)
    return format_datetime(moment, usegmt=True)


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes for a ``Set-Cookie`` directive.

    ``httponly`` is tri-state: ``None`` (unset) emits ``HttpOnly`` just
    like ``True``. Only an explicit ``False`` leaves it out.

    ``expires`` is a datetime or a Unix timestamp in **seconds**
    (``time.time()``), not milliseconds. ``max_age`` is in seconds too.

    ``expires`` and ``max_age`` are independent; when both are given both
    are emitted and compliant clients let ``Max-Age`` win.
    """

    expires: datetime | float | int | None = None
    max_age: int | None = None
    domain: str | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool | None = None
    samesite: SameSite | None = None


_DEFAULT_OPTIONS = CookieOptions()


def serialize_cookie(name: str, value: str, options: CookieOptions | None = None) -> str:
    """Serialize one cookie to a ``Set-Cookie`` header value.

    Example::

        >>> serialize_cookie("foo", "bar")
        'foo=bar; Path=/; HttpOnly'
    """
    opts = options or _DEFAULT_OPTIONS
    parts = [f"{quote(name, safe=_SAFE)}={quote(value, safe=_SAFE)}"]
    if opts.max_age is not None:
        parts.append(f"Max-Age={opts.max_age}")
    if opts.expires is not None:
        parts.append(f"Expires={format_http_date(opts.expires)}")
    if opts.domain:
        parts.append(f"Domain={opts.domain}")
    parts.append(f"Path={opts.path or '/'}")
    if opts.secure:
        parts.append("Secure")
    if opts.httponly is not False:
        parts.append("HttpOnly")
    if opts.samesite:
        parts.append(f"SameSite={opts.samesite}")
    return "; ".join(parts)


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive waiting to be written to a response."""

    name: str
    value: str
    options: CookieOptions = field(default=_DEFAULT_OPTIONS)

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        return serialize_cookie(self.name, self.value, self.options)
