"""HMAC cookie signing on top of ``itsdangerous``.

A signed value is ``value + "." + signature`` where the signature is the
URL-safe, unpadded base64 encoding of ``HMAC(secret, value)``. The secret
is used as the HMAC key directly (no key derivation), so a cookie signed
here verifies anywhere the same scheme is implemented.

The value may contain dots: verification always splits on the last one.

Usage::

    from tollhouse.security.signing import CookieSigner

    signer = CookieSigner("s3cr3t")
    token = signer.sign("user123")       # 'user123.<signature>'
    signer.unsign(token)                 # 'user123'
    signer.unsign("user123.forged")      # None
"""

import hashlib
import hmac
import re
from collections.abc import Mapping, Sequence
from typing import TypeAlias

from itsdangerous import BadSignature, Signer
from itsdangerous.encoding import base64_encode, want_bytes

from tollhouse.errors import ConfigurationError

DEFAULT_ALGORITHM = "sha256"

Secret: TypeAlias = str | bytes | Sequence[str | bytes]

_SIGNATURE_CHARS = re.compile(r"[A-Za-z0-9_-]+")


def _digest_size(algorithm: str) -> int:
    try:
        digest_size = hashlib.new(algorithm).digest_size
    except (TypeError, ValueError):
        digest_size = 0
    if not digest_size:
        msg = f"Unsupported cookie signing algorithm: {algorithm!r}"
        raise ConfigurationError(msg)
    return digest_size


def _secret_keys(secret: Secret) -> list[str | bytes]:
    keys = [secret] if isinstance(secret, (str, bytes)) else list(secret)
    if not keys or not all(keys):
        msg = "Cookie signing secret must not be empty."
        raise ConfigurationError(msg)
    return keys


class CookieSigner(Signer):
    """Sign and verify cookie values with a keyed HMAC.

    *secret* may be a single key or a sequence of keys for rotation.
    New signatures use the last key; verification accepts any of them.

    Raises ``ConfigurationError`` for an empty secret or an algorithm
    name ``hashlib`` does not know.
    """

    def __init__(self, secret: Secret, algorithm: str = DEFAULT_ALGORITHM) -> None:
        digest_size = _digest_size(algorithm)
        super().__init__(
            _secret_keys(secret),
            sep=".",
            key_derivation="none",
            digest_method=algorithm,
        )
        self.algorithm_name = algorithm
        self.signature_length = len(base64_encode(b"\0" * digest_size))

    def looks_signed(self, value: str) -> bool:
        """True if the part after the last ``.`` has the shape of a signature.

        Checks length and alphabet only, not validity. Dotted values such as
        ``GA1.2.1234.5678`` or ``1.0`` do not qualify.
        """
        _, sep, sig = value.rpartition(".")
        if not sep or len(sig) != self.signature_length:
            return False
        return _SIGNATURE_CHARS.fullmatch(sig) is not None

    def verify_signature(self, value: str | bytes, sig: str | bytes) -> bool:
        """Compare *sig* to the expected encoded signature in constant time.

        The encoded forms are compared, so every character of the
        signature counts. Unequal lengths fail before comparing.
        """
        sig = want_bytes(sig)
        value = want_bytes(value)
        for secret_key in reversed(self.secret_keys):
            key = self.derive_key(secret_key)
            expected = base64_encode(self.algorithm.get_signature(key, value))
            if len(sig) == len(expected) and hmac.compare_digest(sig, expected):
                return True
        return False

    def sign(self, value: str | bytes) -> str:  # type: ignore[override]
        """Return ``value.signature``."""
        return super().sign(value).decode("utf-8")

    def unsign(self, signed_value: str | bytes) -> str | None:  # type: ignore[override]
        """Return the original value, or ``None`` if the signature is bad or missing."""
        try:
            return super().unsign(signed_value).decode("utf-8")
        except (BadSignature, UnicodeError):
            return None


def sign(value: str, secret: Secret, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Sign *value* with *secret*. See ``CookieSigner.sign``."""
    return CookieSigner(secret, algorithm).sign(value)


def unsign(signed_value: str, secret: Secret, algorithm: str = DEFAULT_ALGORITHM) -> str | None:
    """Verify *signed_value*; return the unsigned value or ``None``."""
    return CookieSigner(secret, algorithm).unsign(signed_value)


def split_signed_cookies(
    cookies: Mapping[str, str], signer: CookieSigner
) -> tuple[dict[str, str], dict[str, str]]:
    """Partition parsed cookies into ``(plain, verified)``.

    Every name lands in exactly one of the two dicts. Verified entries
    hold the unsigned value; plain entries keep the raw value, including
    tampered signed values and cookies that were never signed.
    """
    plain: dict[str, str] = {}
    verified: dict[str, str] = {}
    for name, raw in cookies.items():
        value = signer.unsign(raw)
        if value is None:
            plain[name] = raw
        else:
            verified[name] = value
    return plain, verified
