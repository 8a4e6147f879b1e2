"""
Tests for the key wrap building blocks.

Tests cover:
- base64url codec and envelope JSON helpers
- PBKDF2 key derivation
- AES Key Wrap against the RFC 3394 test vector
- Envelope model parsing
- Configuration loading
"""
import hashlib

import pytest
from pydantic import ValidationError

from ledger_client.exceptions import (
    ConfigurationError,
    IntegrityError,
    InvalidArgument,
    LedgerClientError,
    MalformedInput,
)
from ledger_client.keywrap import EncryptedKey, KeyWrapConfig
from ledger_client.keywrap.cipher import unwrap_key, wrap_key
from ledger_client.keywrap.codec import (
    b64url_decode,
    b64url_encode,
    dumps_envelope,
    loads_envelope,
)
from ledger_client.keywrap.kdf import derive_key

# RFC 3394 section 4.3: wrap 128 bits of key data with a 256-bit KEK
RFC3394_KEK = bytes.fromhex(
    "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F"
)
RFC3394_KEY = bytes.fromhex("00112233445566778899AABBCCDDEEFF")
RFC3394_WRAPPED = bytes.fromhex(
    "64E8C3F9CE0F5BA263E9777905818A2A93C8191E7D6E8AE7"
)


# --- Test Codec ---

class TestCodec:
    """Tests for base64url encoding."""

    def test_uses_url_alphabet_without_padding(self):
        assert b64url_encode(b"\xfb\xff") == "-_8"

    def test_empty(self):
        assert b64url_encode(b"") == ""
        assert b64url_decode("") == b""

    @pytest.mark.parametrize("size", range(0, 9))
    def test_round_trip_all_padding_lengths(self, size):
        data = bytes(range(250, 250 - size, -1))
        assert b64url_decode(b64url_encode(data)) == data

    @pytest.mark.parametrize("text", ["a+b/", "abc=", "ab cd", "é"])
    def test_rejects_other_alphabets(self, text):
        with pytest.raises(MalformedInput, match="base64url"):
            b64url_decode(text)

    def test_rejects_impossible_length(self):
        with pytest.raises(MalformedInput, match="length"):
            b64url_decode("abcde")

    def test_error_names_field(self):
        with pytest.raises(MalformedInput) as exc:
            b64url_decode("!!", field="p2s")
        assert exc.value.field == "p2s"
        assert "p2s" in str(exc.value)

    def test_rejects_non_text(self):
        with pytest.raises(MalformedInput):
            b64url_decode(b"abcd")


class TestEnvelopeJson:
    """Tests for envelope serialization helpers."""

    def test_dumps_is_compact(self):
        data = dumps_envelope({"encrypted_key": "abc"})
        assert data == b'{"encrypted_key":"abc"}'

    def test_loads_accepts_text(self):
        assert loads_envelope('{"a": 1}') == {"a": 1}

    def test_loads_rejects_invalid_json(self):
        with pytest.raises(MalformedInput, match="JSON"):
            loads_envelope(b"{not json")

    @pytest.mark.parametrize("data", [b"[]", b"1", b'"text"', b"null"])
    def test_loads_rejects_non_objects(self, data):
        with pytest.raises(MalformedInput, match="object"):
            loads_envelope(data)


# --- Test Key Derivation ---

class TestDeriveKey:
    """Tests for PBKDF2 key derivation."""

    def test_matches_pbkdf2_hmac_sha512(self):
        salt = b"\x01" * 32
        expected = hashlib.pbkdf2_hmac("sha512", b"password", salt, 4096, 32)
        assert derive_key("password", salt, 4096) == expected

    def test_deterministic(self):
        salt = b"salt" * 8
        assert derive_key("pw", salt, 10) == derive_key("pw", salt, 10)

    def test_str_and_bytes_passwords_agree(self):
        salt = b"salt" * 8
        assert derive_key("pässword", salt, 10) == derive_key(
            "pässword".encode("utf-8"), salt, 10
        )

    def test_inputs_change_output(self):
        salt = b"salt" * 8
        base = derive_key("pw", salt, 10)
        assert derive_key("pw2", salt, 10) != base
        assert derive_key("pw", b"tlas" * 8, 10) != base
        assert derive_key("pw", salt, 11) != base

    def test_length_and_hash(self):
        salt = b"salt" * 8
        key = derive_key("pw", salt, 10, length=16, hash_name="SHA-256")
        assert key == hashlib.pbkdf2_hmac("sha256", b"pw", salt, 10, 16)

    def test_unknown_hash(self):
        with pytest.raises(InvalidArgument, match="Unsupported KDF hash"):
            derive_key("pw", b"salt", 10, hash_name="MD5")

    @pytest.mark.parametrize("iterations", [0, -5])
    def test_non_positive_iterations(self, iterations):
        with pytest.raises(InvalidArgument, match="iterations"):
            derive_key("pw", b"salt", iterations)

    def test_oversized_iterations(self):
        """Test a count the backend cannot hold is a package error."""
        with pytest.raises(InvalidArgument, match="out of range") as exc:
            derive_key("pw", b"salt" * 8, 2**70)
        assert isinstance(exc.value, LedgerClientError)


# --- Test Key Wrap Cipher ---

class TestKeyWrapCipher:
    """Tests for AES Key Wrap."""

    def test_rfc3394_vector(self):
        assert wrap_key(RFC3394_KEK, RFC3394_KEY) == RFC3394_WRAPPED

    def test_rfc3394_vector_unwrap(self):
        assert unwrap_key(RFC3394_KEK, RFC3394_WRAPPED) == RFC3394_KEY

    def test_wrap_is_deterministic(self):
        key = b"\x42" * 32
        assert wrap_key(RFC3394_KEK, key) == wrap_key(RFC3394_KEK, key)

    def test_output_is_8_bytes_longer(self):
        assert len(wrap_key(RFC3394_KEK, b"\x00" * 40)) == 48

    @pytest.mark.parametrize("size", [0, 8, 12, 18])
    def test_wrap_rejects_bad_sizes(self, size):
        with pytest.raises(InvalidArgument):
            wrap_key(RFC3394_KEK, b"\x00" * size)

    def test_wrap_rejects_bad_wrapping_key(self):
        with pytest.raises(InvalidArgument, match="Wrapping key"):
            wrap_key(b"short", RFC3394_KEY)

    def test_unwrap_wrong_key_fails_closed(self):
        other = bytes(32)
        with pytest.raises(IntegrityError):
            unwrap_key(other, RFC3394_WRAPPED)

    def test_unwrap_tampered(self):
        tampered = bytearray(RFC3394_WRAPPED)
        tampered[-1] ^= 0x80
        with pytest.raises(IntegrityError):
            unwrap_key(RFC3394_KEK, bytes(tampered))

    @pytest.mark.parametrize("size", [0, 16, 23])
    def test_unwrap_bad_lengths(self, size):
        with pytest.raises(IntegrityError, match="invalid length"):
            unwrap_key(RFC3394_KEK, b"\x00" * size)


# --- Test Envelope Model ---

class TestEncryptedKeyModel:
    """Tests for the envelope model."""

    def test_build_and_dump(self):
        envelope = EncryptedKey.build(4096, "c2FsdA", "a2V5")
        assert envelope.to_dict() == {
            "unprotected": {
                "alg": "PBES2-HS512+A256KW",
                "p2c": 4096,
                "p2s": "c2FsdA",
            },
            "encrypted_key": "a2V5",
        }
        assert envelope.iterations == 4096

    def test_parse_round_trip(self):
        wire = EncryptedKey.build(8192, "c2FsdA", "a2V5").to_dict()
        assert EncryptedKey.parse(wire).to_dict() == wire

    def test_is_immutable(self):
        envelope = EncryptedKey.build(4096, "c2FsdA", "a2V5")
        with pytest.raises(ValidationError):
            envelope.encrypted_key = "other"

    def test_first_error_reported(self):
        """Test the header is reported before the body."""
        with pytest.raises(MalformedInput) as exc:
            EncryptedKey.parse({"unprotected": {"alg": "none"}})
        assert exc.value.field == "alg"
        assert "header" in str(exc.value)


# --- Test Configuration ---

class TestKeyWrapConfig:
    """Tests for KeyWrapConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LEDGER_KEYWRAP_MAX_ITERATIONS", raising=False)
        config = KeyWrapConfig.from_env()
        assert config.max_iterations is None
        assert config.allows(10**9)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LEDGER_KEYWRAP_MAX_ITERATIONS", "100000")
        config = KeyWrapConfig.from_env()
        assert config.max_iterations == 100000
        assert config.allows(100000)
        assert not config.allows(100001)

    def test_blank_env_is_unset(self, monkeypatch):
        monkeypatch.setenv("LEDGER_KEYWRAP_MAX_ITERATIONS", "  ")
        assert KeyWrapConfig.from_env().max_iterations is None

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("LEDGER_KEYWRAP_MAX_ITERATIONS", "lots")
        with pytest.raises(ConfigurationError, match="must be an integer") as exc:
            KeyWrapConfig.from_env()
        assert isinstance(exc.value, ValueError)

    @pytest.mark.parametrize("value", ["100", "0", "-5"])
    def test_env_cap_below_default(self, monkeypatch, value):
        """Test an out-of-range cap is reported as a package error."""
        monkeypatch.setenv("LEDGER_KEYWRAP_MAX_ITERATIONS", value)
        with pytest.raises(
            ConfigurationError, match="LEDGER_KEYWRAP_MAX_ITERATIONS"
        ) as exc:
            KeyWrapConfig.from_env()
        assert not isinstance(exc.value, ValidationError)

    def test_cap_below_default_rejected(self):
        """Test a cap cannot refuse envelopes this package produces."""
        with pytest.raises(ValidationError):
            KeyWrapConfig(max_iterations=1000)
