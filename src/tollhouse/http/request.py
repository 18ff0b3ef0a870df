"""Immutable HTTP request.

Frozen metadata only. Cookie middleware never mutates a request: it
forwards a copy carrying the parsed cookies via ``with_cookies``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from tollhouse.http.headers import Headers

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``cookies`` and ``signed_cookies`` are empty until a cookie
    middleware stage has run. Both are read-only mappings.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    cookies: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    signed_cookies: Mapping[str, str] = field(default_factory=lambda: _EMPTY)

    @property
    def cookie_header(self) -> str | None:
        """The raw ``Cookie`` header value.

        HTTP/2 may split cookies across several ``cookie`` fields; they
        are joined back with ``"; "``.
        """
        values = self.headers.get_list("cookie")
        return "; ".join(values) if values else None

    def with_cookies(
        self,
        cookies: Mapping[str, str],
        *,
        signed_cookies: Mapping[str, str] | None = None,
    ) -> Request:
        """Return a new Request carrying read-only cookie mappings."""
        return replace(
            self,
            cookies=MappingProxyType(dict(cookies)),
            signed_cookies=(
                MappingProxyType(dict(signed_cookies))
                if signed_cookies is not None
                else self.signed_cookies
            ),
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
            headers=Headers(tuple(scope.get("headers", ()))),
        )
