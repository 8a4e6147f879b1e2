"""
Envelope Codec — base64url text encoding and JSON serialization.

Binary envelope members (salt, wrapped key) travel as base64url without
padding, as in JOSE. Whole envelopes serialize to compact JSON via orjson.
"""
import base64
import binascii
import re
from typing import Any

import orjson

from ..exceptions import MalformedInput

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str, field: str = "value") -> bytes:
    """Decode unpadded base64url text back to bytes.

    Args:
        text: base64url string, without ``=`` padding.
        field: Envelope member name, used in error messages.

    Raises:
        MalformedInput: If ``text`` is not valid unpadded base64url.
    """
    if not isinstance(text, str) or not _B64URL_RE.match(text):
        raise MalformedInput(f'"{field}" is not valid base64url.', field=field)
    if len(text) % 4 == 1:
        # no byte sequence encodes to this length
        raise MalformedInput(
            f'"{field}" has an invalid base64url length.', field=field
        )
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as err:
        raise MalformedInput(
            f'"{field}" is not valid base64url.', field=field
        ) from err


def dumps_envelope(envelope: dict[str, Any]) -> bytes:
    """Serialize an envelope to compact JSON bytes."""
    return orjson.dumps(envelope)


def loads_envelope(data: bytes | str) -> dict[str, Any]:
    """Parse envelope JSON.

    Only the JSON layer is checked here; header validation happens on
    unwrap.

    Raises:
        MalformedInput: If ``data`` is not JSON or not a JSON object.
    """
    try:
        parsed = orjson.loads(data)
    except orjson.JSONDecodeError as err:
        raise MalformedInput(f"Envelope is not valid JSON: {err}") from err
    if not isinstance(parsed, dict):
        raise MalformedInput("Envelope must be a JSON object.")
    return parsed
