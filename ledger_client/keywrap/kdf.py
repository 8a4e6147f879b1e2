"""
Key Derivation — PBKDF2 stretching of a password into a wrapping key.
"""
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..exceptions import InvalidArgument
from .config import HASH_NAME, KEY_LENGTH

_HASHES = {
    "SHA-256": hashes.SHA256,
    "SHA-384": hashes.SHA384,
    "SHA-512": hashes.SHA512,
}


def derive_key(
    password: str | bytes,
    salt: bytes,
    iterations: int,
    length: int = KEY_LENGTH,
    hash_name: str = HASH_NAME,
) -> bytes:
    """Derive a symmetric key from a password using PBKDF2-HMAC.

    Deterministic for identical inputs. No upper bound is placed on
    ``iterations``; callers reading it from untrusted input apply their
    own limit (see :class:`KeyWrapConfig`).

    Args:
        password: Password text (UTF-8 encoded) or raw bytes.
        salt: Random salt stored next to the wrapped key.
        iterations: PBKDF2 iteration count.
        length: Output length in bytes.
        hash_name: PRF hash, one of ``SHA-256``, ``SHA-384``, ``SHA-512``.

    Returns:
        ``length`` bytes of derived key material.

    Raises:
        InvalidArgument: On an unknown hash, non-positive parameters or an
            iteration count the backend cannot represent.
    """
    try:
        algorithm = _HASHES[hash_name]()
    except KeyError:
        raise InvalidArgument(f"Unsupported KDF hash: {hash_name}") from None
    if iterations < 1:
        raise InvalidArgument(f"iterations must be positive, got {iterations}")
    if length < 1:
        raise InvalidArgument(f"length must be positive, got {length}")
    if isinstance(password, str):
        password = password.encode("utf-8")
    try:
        kdf = PBKDF2HMAC(
            algorithm=algorithm,
            length=length,
            salt=salt,
            iterations=iterations,
        )
        return kdf.derive(password)
    except OverflowError:
        raise InvalidArgument(
            f"iterations out of range for PBKDF2, got {iterations}"
        ) from None
