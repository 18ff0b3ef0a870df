"""Tests for tollhouse.security.signing — HMAC sign/unsign and the verified/plain split."""

import base64
import hashlib
import hmac

import pytest

from tollhouse.errors import ConfigurationError
from tollhouse.security.signing import CookieSigner, sign, split_signed_cookies, unsign

SECRET = "test-secret"


def _expected_signature(value: str, secret: str = SECRET, algorithm: str = "sha256") -> str:
    digest = hmac.new(secret.encode(), value.encode(), algorithm).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


class TestSign:
    def test_format(self) -> None:
        signed = sign("hello", SECRET)
        assert signed == f"hello.{_expected_signature('hello')}"

    def test_signature_is_unpadded_urlsafe(self) -> None:
        signature = sign("hello", SECRET).rpartition(".")[2]
        assert "=" not in signature
        assert "+" not in signature
        assert "/" not in signature
        assert len(signature) == 43  # 32-byte sha256 digest

    @pytest.mark.parametrize("algorithm", ["sha1", "sha256", "sha512"])
    def test_algorithms(self, algorithm: str) -> None:
        signed = sign("hello", SECRET, algorithm)
        assert signed == f"hello.{_expected_signature('hello', algorithm=algorithm)}"

    def test_deterministic(self) -> None:
        assert sign("v", SECRET) == sign("v", SECRET)


class TestUnsign:
    @pytest.mark.parametrize("value", ["hello", "", "hello.world", "a.b.c.", "中文", "x=y; z"])
    def test_round_trip(self, value: str) -> None:
        assert unsign(sign(value, SECRET), SECRET) == value

    def test_invalid_signature(self) -> None:
        assert unsign("hello.invalid-signature", SECRET) is None

    def test_missing_separator(self) -> None:
        assert unsign("hello", SECRET) is None

    def test_empty_string(self) -> None:
        assert unsign("", SECRET) is None

    def test_wrong_secret(self) -> None:
        assert unsign(sign("hello", SECRET), "wrong-secret") is None

    def test_algorithm_mismatch_is_tamper(self) -> None:
        assert unsign(sign("hello", SECRET, "sha256"), SECRET, "sha512") is None
        assert unsign(sign("hello", SECRET, "sha256"), SECRET, "sha3_256") is None

    def test_every_single_character_mutation_rejected(self) -> None:
        signed = sign("hello", SECRET)
        value, _, signature = signed.rpartition(".")
        for i, ch in enumerate(signature):
            replacement = "A" if ch != "A" else "B"
            mutated = signature[:i] + replacement + signature[i + 1 :]
            assert unsign(f"{value}.{mutated}", SECRET) is None, i

    def test_truncated_signature(self) -> None:
        assert unsign(sign("hello", SECRET)[:-1], SECRET) is None

    def test_extended_signature(self) -> None:
        assert unsign(sign("hello", SECRET) + "A", SECRET) is None

    def test_value_tampered(self) -> None:
        signature = sign("user1", SECRET).rpartition(".")[2]
        assert unsign(f"admin.{signature}", SECRET) is None

    def test_non_ascii_signature_does_not_raise(self) -> None:
        assert unsign("hello.中文签名", SECRET) is None


class TestCookieSigner:
    def test_sign_and_unsign(self) -> None:
        signer = CookieSigner(SECRET)
        assert signer.unsign(signer.sign("user123")) == "user123"

    def test_bytes_secret_matches_str(self) -> None:
        assert CookieSigner(SECRET.encode()).sign("v") == CookieSigner(SECRET).sign("v")

    def test_key_rotation(self) -> None:
        old = CookieSigner("old-key")
        rotated = CookieSigner(["old-key", "new-key"])

        assert rotated.unsign(old.sign("v")) == "v"
        assert rotated.sign("v") == CookieSigner("new-key").sign("v")
        assert old.unsign(rotated.sign("v")) is None

    def test_empty_secret_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            CookieSigner("")

    def test_empty_key_in_rotation_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            CookieSigner(["key", ""])

    def test_unknown_algorithm_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported"):
            CookieSigner(SECRET, "not-a-hash")

    def test_variable_length_digest_rejected(self) -> None:
        assert "shake_128" in hashlib.algorithms_available
        with pytest.raises(ConfigurationError):
            CookieSigner(SECRET, "shake_128")

    def test_algorithm_name_kept(self) -> None:
        assert CookieSigner(SECRET, "sha512").algorithm_name == "sha512"

    @pytest.mark.parametrize(("algorithm", "length"), [("sha1", 27), ("sha256", 43), ("sha512", 86)])
    def test_signature_length(self, algorithm: str, length: int) -> None:
        assert CookieSigner(SECRET, algorithm).signature_length == length

    def test_looks_signed(self) -> None:
        signer = CookieSigner(SECRET)
        assert signer.looks_signed(signer.sign("v"))
        assert signer.looks_signed(CookieSigner("other").sign("a.b"))

    @pytest.mark.parametrize(
        "value", ["GA1.2.1234.5678", "1.0", "plain", "tampered.invalid", "x." + "!" * 43]
    )
    def test_dotted_values_do_not_look_signed(self, value: str) -> None:
        assert not CookieSigner(SECRET).looks_signed(value)

    def test_other_algorithm_does_not_look_signed(self) -> None:
        assert not CookieSigner(SECRET, "sha512").looks_signed(sign("v", SECRET))


class TestSplitSignedCookies:
    def test_partition(self) -> None:
        signer = CookieSigner(SECRET)
        cookies = {"userId": signer.sign("user123"), "plain": "value"}

        plain, verified = split_signed_cookies(cookies, signer)

        assert verified == {"userId": "user123"}
        assert plain == {"plain": "value"}

    def test_tampered_kept_raw_in_plain(self) -> None:
        signer = CookieSigner(SECRET)

        plain, verified = split_signed_cookies({"userId": "tampered.invalid"}, signer)

        assert verified == {}
        assert plain == {"userId": "tampered.invalid"}

    def test_total_and_disjoint(self) -> None:
        signer = CookieSigner(SECRET)
        cookies = {
            "a": signer.sign("1"),
            "b": "2",
            "c": CookieSigner("other").sign("3"),
            "d": signer.sign("x.y"),
        }

        plain, verified = split_signed_cookies(cookies, signer)

        assert set(plain) | set(verified) == set(cookies)
        assert not set(plain) & set(verified)
        assert verified == {"a": "1", "d": "x.y"}

    def test_empty(self) -> None:
        assert split_signed_cookies({}, CookieSigner(SECRET)) == ({}, {})
