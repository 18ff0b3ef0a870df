"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The host pipeline checks the shape, not the
lineage. Cookie middleware hands ``next`` a new ``Request`` rather than
mutating the one it received.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from tollhouse.http.request import Request
from tollhouse.http.response import Response

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for tollhouse-compatible middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def theme(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Theme", request.cookies.get("theme", "light"))

        # Class middleware
        class CookieMiddleware:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
