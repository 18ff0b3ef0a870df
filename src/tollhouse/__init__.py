"""tollhouse: cookie parsing, HMAC signing, and Set-Cookie building.

Read cookies in a middleware pipeline::

    from tollhouse import SignedCookieMiddleware, SignedCookiesConfig

    pipeline.add(SignedCookieMiddleware(SignedCookiesConfig(secret="s3cr3t")))

    async def handler(request):
        theme = request.cookies.get("theme")
        user_id = request.signed_cookies.get("user_id")

Write them on the way out::

    from tollhouse import CookieJar, CookieOptions

    response = (
        CookieJar("s3cr3t")
        .set("theme", "dark")
        .set_signed("user_id", "42", CookieOptions(max_age=3600, samesite="Lax"))
        .apply(response)
    )
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "CookieJar",
    "CookieMiddleware",
    "CookieOptions",
    "CookieSigner",
    "Middleware",
    "Next",
    "Request",
    "Response",
    "SetCookie",
    "SignedCookieMiddleware",
    "SignedCookiesConfig",
    "TollhouseError",
    "create_cookie_jar",
    "parse_cookies",
    "serialize_cookie",
    "sign",
    "unsign",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "tollhouse.errors",
    "CookieJar": "tollhouse.http.jar",
    "CookieMiddleware": "tollhouse.middleware.cookies",
    "CookieOptions": "tollhouse.http.cookies",
    "CookieSigner": "tollhouse.security.signing",
    "Middleware": "tollhouse.middleware.protocol",
    "Next": "tollhouse.middleware.protocol",
    "Request": "tollhouse.http.request",
    "Response": "tollhouse.http.response",
    "SetCookie": "tollhouse.http.cookies",
    "SignedCookieMiddleware": "tollhouse.middleware.cookies",
    "SignedCookiesConfig": "tollhouse.middleware.cookies",
    "TollhouseError": "tollhouse.errors",
    "create_cookie_jar": "tollhouse.http.jar",
    "parse_cookies": "tollhouse.http.cookies",
    "serialize_cookie": "tollhouse.http.cookies",
    "sign": "tollhouse.security.signing",
    "unsign": "tollhouse.security.signing",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tollhouse`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module 'tollhouse' has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_path), name)
