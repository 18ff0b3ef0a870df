"""Immutable, case-insensitive HTTP headers.

Built from the raw ASGI byte pairs, decoded once as latin-1 with
lowercased names. Order and repeats are kept, so multi-valued headers
(``Set-Cookie``, or ``Cookie`` split into several fields by HTTP/2)
stay available through ``get_list``.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only header mapping.

    ``headers[name]`` is the first value for *name*; ``get_list`` returns
    every value in order.
    """

    __slots__ = ("_items",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        items = tuple((name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw)
        object.__setattr__(self, "_items", items)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]] | Mapping[str, str]) -> "Headers":
        """Build headers from ``str`` pairs or a plain mapping."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls((name.encode("latin-1"), value.encode("latin-1")) for name, value in items)

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._items:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and any(name == key.lower() for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._items))

    def __len__(self) -> int:
        return len({name for name, _ in self._items})

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in the order received."""
        wanted = key.lower()
        return [value for name, value in self._items if name == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Header pairs re-encoded as bytes (names lowercased) for ASGI."""
        return tuple((name.encode("latin-1"), value.encode("latin-1")) for name, value in self._items)
