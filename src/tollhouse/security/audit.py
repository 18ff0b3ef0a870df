"""Cookie integrity events.

Opt-in channel for signed cookies that fail verification. Register a
sink to forward them to logs, metrics, or a SIEM::

    from tollhouse.security.audit import set_security_event_sink

    set_security_event_sink(lambda event: log.warning("%s %s", event.name, event.cookie_names))

Events carry cookie names only. Values and secrets are never attached.
"""

import threading
from collections.abc import Callable, Iterable
from typing import TypeAlias
from dataclasses import dataclass, field
from time import time

from tollhouse.http.request import Request

SIGNATURE_REJECTED = "cookies.signature_rejected"


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A cookie integrity event for one request."""

    name: str
    method: str
    path: str
    cookie_names: tuple[str, ...]
    algorithm: str
    timestamp: float = field(default_factory=time)


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Set a process-wide sink for cookie events.

    Pass ``None`` to disable event delivery.
    """
    global _sink
    with _sink_lock:
        _sink = sink


def report_rejected_signatures(
    request: Request, cookie_names: Iterable[str], *, algorithm: str
) -> None:
    """Deliver a ``cookies.signature_rejected`` event if a sink is set."""
    with _sink_lock:
        sink = _sink
    if sink is None:
        return
    sink(
        SecurityEvent(
            name=SIGNATURE_REJECTED,
            method=request.method,
            path=request.path,
            cookie_names=tuple(sorted(cookie_names)),
            algorithm=algorithm,
        )
    )
