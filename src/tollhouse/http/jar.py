"""CookieJar: collects outgoing cookies and writes them onto a response.

A jar lives for one response. Chain ``set`` / ``set_signed`` /
``delete`` calls, then ``apply`` it once::

    from tollhouse.http.jar import CookieJar

    jar = CookieJar(secret="s3cr3t")
    response = (
        jar.set("theme", "dark")
        .set_signed("user", "alice", CookieOptions(max_age=3600))
        .delete("legacy")
        .apply(response)
    )
"""

from dataclasses import replace
from datetime import UTC, datetime
from typing import Self

from tollhouse.errors import ConfigurationError
from tollhouse.http.cookies import CookieOptions, SetCookie
from tollhouse.http.response import Response
from tollhouse.security.signing import DEFAULT_ALGORITHM, CookieSigner, Secret

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class CookieJar:
    """Accumulate ``Set-Cookie`` directives for a single response.

    *secret* is only needed for ``set_signed``. A jar without one can
    still set and delete plain cookies.
    """

    __slots__ = ("_cookies", "_signer")

    def __init__(self, secret: Secret | None = None, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self._cookies: list[SetCookie] = []
        self._signer = CookieSigner(secret, algorithm) if secret else None

    def __len__(self) -> int:
        return len(self._cookies)

    def __repr__(self) -> str:
        names = ", ".join(cookie.name for cookie in self._cookies)
        return f"<CookieJar [{names}]>"

    @property
    def directives(self) -> tuple[str, ...]:
        """The serialized ``Set-Cookie`` values, in the order they were added."""
        return tuple(cookie.to_header_value() for cookie in self._cookies)

    def set(self, name: str, value: str, options: CookieOptions | None = None) -> Self:
        """Queue a plain cookie."""
        self._cookies.append(SetCookie(name, value, options or CookieOptions()))
        return self

    def set_signed(self, name: str, value: str, options: CookieOptions | None = None) -> Self:
        """Queue a cookie whose value is signed with the jar's secret.

        Raises ``ConfigurationError`` if the jar has no secret; nothing
        is queued in that case.
        """
        if self._signer is None:
            msg = "Secret is required for signed cookies."
            raise ConfigurationError(msg)
        return self.set(name, self._signer.sign(value), options)

    def delete(self, name: str, options: CookieOptions | None = None) -> Self:
        """Queue a directive that makes the client drop cookie *name*.

        Emits both ``Max-Age=0`` and an ``Expires`` at the Unix epoch.
        Only ``domain`` and ``path`` are taken from *options*; they must
        match the ones the cookie was set with.
        """
        scope = options or CookieOptions()
        expired = CookieOptions(
            domain=scope.domain,
            path=scope.path,
            max_age=0,
            expires=_EPOCH,
        )
        return self.set(name, "", expired)

    def apply(self, response: Response) -> Response:
        """Return *response* with one ``Set-Cookie`` header per queued cookie.

        Existing headers, ``Set-Cookie`` included, are kept ahead of the
        new ones. An empty jar returns *response* itself.
        """
        if not self._cookies:
            return response
        added = tuple(("Set-Cookie", value) for value in self.directives)
        return replace(response, headers=(*response.headers, *added))


def create_cookie_jar(secret: Secret | None = None, algorithm: str = DEFAULT_ALGORITHM) -> CookieJar:
    """Create a fresh ``CookieJar``."""
    return CookieJar(secret, algorithm)
