"""
Password-based key wrapping (PBES2-HS512+A256KW).

- ``wrap_with_password(password, key)`` — derive a wrapping key from the
  password with a fresh salt and return an encrypted-key envelope
- ``unwrap_with_password(password, envelope)`` — validate the envelope,
  re-derive the wrapping key from its stored parameters and recover the key

Security Note:
    Never log passwords, salts, derived keys or wrapped key bytes.
    Only log the algorithm, iteration counts and lengths.
"""
import asyncio
import logging
import os
from typing import Any, Optional

from ..exceptions import InvalidArgument, MalformedInput
from .cipher import check_key_size, unwrap_key, wrap_key
from .codec import b64url_decode, b64url_encode
from .config import ITERATIONS, SALT_SIZE, KeyWrapConfig
from .envelope import EncryptedKey
from .kdf import derive_key

logger = logging.getLogger("ledger.client.keywrap")


def _check_password(password: Any) -> None:
    if not isinstance(password, (str, bytes)):
        raise InvalidArgument("password must be a string.")
    if not password:
        raise InvalidArgument("password must not be empty.")


async def wrap_with_password(password: str, key: bytes) -> dict[str, Any]:
    """Wrap ``key`` with a key derived from ``password``.

    A 256-bit AES-KW key is derived with PBKDF2-HMAC-SHA512 over a fresh
    32-byte salt, then used to wrap ``key``.

    Args:
        password: Non-empty password.
        key: Key material to protect; at least 16 bytes, multiple of 8.

    Returns:
        Encrypted-key envelope as a JSON-compatible dict.

    Raises:
        InvalidArgument: If ``key`` is missing, empty or of a bad length,
            or ``password`` is empty.
    """
    if not key:
        raise InvalidArgument('"key" must be a non-empty byte string.')
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise InvalidArgument('"key" must be bytes.')
    key = bytes(key)
    check_key_size(key)
    _check_password(password)

    salt = os.urandom(SALT_SIZE)
    wrapping_key = await asyncio.to_thread(derive_key, password, salt, ITERATIONS)
    wrapped = wrap_key(wrapping_key, key)

    envelope = EncryptedKey.build(
        iterations=ITERATIONS,
        salt=b64url_encode(salt),
        encrypted_key=b64url_encode(wrapped),
    )
    logger.debug(
        "Wrapped %d-byte key (p2c=%d)", len(key), ITERATIONS,
    )
    return envelope.to_dict()


async def unwrap_with_password(
    password: str,
    envelope: Any,
    config: Optional[KeyWrapConfig] = None,
) -> bytes:
    """Recover a key from an encrypted-key envelope.

    The envelope is validated in full before any key derivation. The
    iteration count always comes from the envelope itself.

    Args:
        password: Password used at wrap time.
        envelope: Envelope produced by :func:`wrap_with_password`.
        config: Optional limits; defaults to :meth:`KeyWrapConfig.from_env`.

    Returns:
        The unwrapped key bytes.

    Raises:
        MalformedInput: If the envelope does not have the expected shape,
            algorithm or encodings.
        IntegrityError: On a wrong password or a tampered envelope.
        ConfigurationError: If no ``config`` is given and
            ``LEDGER_KEYWRAP_MAX_ITERATIONS`` is invalid.
    """
    _check_password(password)
    parsed = EncryptedKey.parse(envelope)
    if config is None:
        config = KeyWrapConfig.from_env()

    iterations = parsed.iterations
    if not config.allows(iterations):
        logger.warning(
            "Rejected envelope: p2c=%d exceeds max_iterations=%d",
            iterations, config.max_iterations,
        )
        raise MalformedInput(
            f'"p2c" exceeds the allowed maximum ({config.max_iterations}).',
            field="p2c",
        )
    salt = b64url_decode(parsed.unprotected.p2s, field="p2s")
    wrapped = b64url_decode(parsed.encrypted_key, field="encrypted_key")

    unwrapping_key = await asyncio.to_thread(derive_key, password, salt, iterations)
    key = unwrap_key(unwrapping_key, wrapped)
    logger.debug("Unwrapped %d-byte key (p2c=%d)", len(key), iterations)
    return key
