"""Key Wrap — Password-based wrapping of symmetric keys.

Keys are wrapped with AES-256-KW under a key derived from a password with
PBKDF2-HMAC-SHA512, and carried in a JWE-style envelope.

Security Note (Threat Model):
    The iteration count of an envelope is read from the envelope itself.
    A crafted envelope can request an arbitrarily expensive derivation
    unless ``KeyWrapConfig.max_iterations`` is set.
"""

from .protocol import wrap_with_password, unwrap_with_password
from .envelope import EncryptedKey, EncryptedKeyHeader
from .config import ALGORITHM, KeyWrapConfig
from .codec import b64url_encode, b64url_decode, dumps_envelope, loads_envelope

__all__ = [
    "wrap_with_password",
    "unwrap_with_password",
    "EncryptedKey",
    "EncryptedKeyHeader",
    "ALGORITHM",
    "KeyWrapConfig",
    "b64url_encode",
    "b64url_decode",
    "dumps_envelope",
    "loads_envelope",
]
