"""Cookie integrity: HMAC signing and security audit events.

Signing::

    from tollhouse.security import CookieSigner

    signer = CookieSigner("s3cr3t")
    signed = signer.sign("user123")
    assert signer.unsign(signed) == "user123"

Audit sink::

    from tollhouse.security import set_security_event_sink

    set_security_event_sink(lambda event: log.warning("%s", event))
"""

from tollhouse.security.audit import (
    SecurityEvent,
    report_rejected_signatures,
    set_security_event_sink,
)
from tollhouse.security.signing import (
    DEFAULT_ALGORITHM,
    CookieSigner,
    sign,
    split_signed_cookies,
    unsign,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "CookieSigner",
    "SecurityEvent",
    "report_rejected_signatures",
    "set_security_event_sink",
    "sign",
    "split_signed_cookies",
    "unsign",
]
