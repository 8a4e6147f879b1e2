"""
Key Wrap Cipher — AES Key Wrap (RFC 3394).

cryptography's ``aes_key_wrap`` uses the RFC 3394 default initial value
``A6A6A6A6A6A6A6A6`` and checks it again on unwrap, so wrapping is
deterministic and unwrap fails closed on any mismatch.
"""
import logging

from cryptography.hazmat.primitives.keywrap import (
    InvalidUnwrap,
    aes_key_unwrap,
    aes_key_wrap,
)

from ..exceptions import IntegrityError, InvalidArgument

logger = logging.getLogger("ledger.client.keywrap")

MIN_KEY_SIZE = 16
BLOCK_SIZE = 8


def _check_wrapping_key(wrapping_key: bytes) -> None:
    if len(wrapping_key) not in (16, 24, 32):
        raise InvalidArgument(
            f"Wrapping key must be 16, 24 or 32 bytes, got {len(wrapping_key)}"
        )


def check_key_size(key: bytes) -> None:
    """Raise InvalidArgument unless ``key`` can be wrapped."""
    if len(key) < MIN_KEY_SIZE or len(key) % BLOCK_SIZE:
        raise InvalidArgument(
            "Key to wrap must be at least 16 bytes and a multiple of 8 "
            f"bytes, got {len(key)}"
        )


def wrap_key(wrapping_key: bytes, key: bytes) -> bytes:
    """Wrap ``key`` under ``wrapping_key``.

    Returns:
        Wrapped key, 8 bytes longer than ``key``.

    Raises:
        InvalidArgument: If ``key`` is shorter than 16 bytes or not a
            multiple of 8 bytes long.
    """
    _check_wrapping_key(wrapping_key)
    check_key_size(key)
    return aes_key_wrap(wrapping_key, key)


def unwrap_key(wrapping_key: bytes, wrapped: bytes) -> bytes:
    """Unwrap ``wrapped`` under ``wrapping_key``.

    Raises:
        IntegrityError: If the integrity check fails or the ciphertext
            cannot be a wrapped key.
    """
    _check_wrapping_key(wrapping_key)
    if len(wrapped) < MIN_KEY_SIZE + BLOCK_SIZE or len(wrapped) % BLOCK_SIZE:
        raise IntegrityError(
            f"Wrapped key has an invalid length ({len(wrapped)} bytes)"
        )
    try:
        return aes_key_unwrap(wrapping_key, wrapped)
    except InvalidUnwrap as err:
        logger.warning("Key unwrap failed its integrity check")
        raise IntegrityError("Key unwrap failed its integrity check") from err
