"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Headers are an ordered
tuple of pairs, so repeated headers such as ``Set-Cookie`` each keep
their own occurrence instead of being comma-joined.
"""

from dataclasses import dataclass, field, replace
from http import HTTPStatus


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``reason`` is the status text; it defaults to the standard phrase
    for ``status``.
    """

    body: str | bytes = ""
    status: int = 200
    reason: str = field(default="")
    headers: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.reason:
            object.__setattr__(self, "reason", _reason_phrase(self.status))

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Header access --

    def get_headers(self, name: str) -> list[str]:
        """Return every value of header *name*, in order (case-insensitive)."""
        name_lower = name.lower()
        return [value for hname, value in self.headers if hname.lower() == name_lower]

    @property
    def set_cookies(self) -> list[str]:
        """All ``Set-Cookie`` header values, in order."""
        return self.get_headers("set-cookie")

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
