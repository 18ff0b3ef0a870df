"""Cookie middleware: parse, and optionally verify, request cookies.

``CookieMiddleware`` parses the ``Cookie`` header into
``request.cookies``. ``SignedCookieMiddleware`` also checks signatures
and moves every cookie that verifies into ``request.signed_cookies``
(with the signature stripped); everything else stays in
``request.cookies`` exactly as the client sent it.

A bad signature is not an error. The cookie is simply not trusted, so
handlers that require a signed value must look it up in
``signed_cookies``::

    from tollhouse.middleware.cookies import SignedCookieMiddleware, SignedCookiesConfig

    pipeline.add(SignedCookieMiddleware(SignedCookiesConfig(secret="s3cr3t")))

    async def handler(request: Request) -> Response:
        user_id = request.signed_cookies.get("user_id")
        ...
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from tollhouse.http.cookies import parse_cookies
from tollhouse.http.request import Request
from tollhouse.http.response import Response
from tollhouse.middleware.protocol import Next
from tollhouse.security.audit import report_rejected_signatures
from tollhouse.security.signing import DEFAULT_ALGORITHM, CookieSigner, split_signed_cookies

logger = logging.getLogger("tollhouse.cookies")


# -- Configuration --


@dataclass(frozen=True, slots=True)
class SignedCookiesConfig:
    """Signed cookie middleware configuration.

    ``secret`` is required. Pass a sequence to rotate keys: the last one
    signs, all of them verify.
    """

    secret: str | Sequence[str]
    algorithm: str = DEFAULT_ALGORITHM


# -- Middleware --


class CookieMiddleware:
    """Expose the parsed ``Cookie`` header as ``request.cookies``."""

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        cookies = parse_cookies(request.cookie_header)
        return await next(request.with_cookies(cookies))


class SignedCookieMiddleware:
    """Split request cookies into verified and plain mappings.

    Raises ``ConfigurationError`` at construction if the secret is empty
    or the algorithm is unknown.
    """

    __slots__ = ("_config", "_signer")

    def __init__(self, config: SignedCookiesConfig) -> None:
        self._config = config
        self._signer = CookieSigner(config.secret, config.algorithm)

    async def __call__(self, request: Request, next: Next) -> Response:
        """Verify cookie signatures, then dispatch."""
        plain, verified = split_signed_cookies(parse_cookies(request.cookie_header), self._signer)

        rejected = sorted(name for name, value in plain.items() if self._signer.looks_signed(value))
        if rejected:
            logger.debug(
                "%s %s: bad cookie signatures %s", request.method, request.path, ", ".join(rejected)
            )
            report_rejected_signatures(request, rejected, algorithm=self._config.algorithm)

        return await next(request.with_cookies(plain, signed_cookies=verified))
