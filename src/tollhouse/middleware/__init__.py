"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    CookieMiddleware -- Parse the Cookie header into request.cookies
    SignedCookieMiddleware -- Verify signed cookies into request.signed_cookies
"""

from tollhouse.middleware.cookies import (
    CookieMiddleware,
    SignedCookieMiddleware,
    SignedCookiesConfig,
)
from tollhouse.middleware.protocol import Middleware, Next

__all__ = [
    "CookieMiddleware",
    "Middleware",
    "Next",
    "SignedCookieMiddleware",
    "SignedCookiesConfig",
]
