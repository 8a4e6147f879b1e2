"""
Encrypted Key Envelope — strict model of the wrapped-key container.

Wire shape::

    {
        "unprotected": {
            "alg": "PBES2-HS512+A256KW",
            "p2c": 4096,
            "p2s": "<base64url salt>"
        },
        "encrypted_key": "<base64url wrapped key>"
    }

Every member is validated before any cryptography runs. Additional JOSE
header members are tolerated and carried through untouched.
"""
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
)

from ..exceptions import MalformedInput
from .config import ALGORITHM, MAX_ITERATIONS


class EncryptedKeyHeader(BaseModel):
    """Unprotected JWE header carrying the PBES2 parameters."""

    model_config = ConfigDict(frozen=True, extra="allow")

    alg: Literal["PBES2-HS512+A256KW"]
    p2c: StrictInt = Field(gt=0, le=MAX_ITERATIONS)
    p2s: StrictStr


class EncryptedKey(BaseModel):
    """Password-wrapped key envelope."""

    model_config = ConfigDict(frozen=True, extra="allow")

    unprotected: EncryptedKeyHeader
    encrypted_key: StrictStr

    @classmethod
    def build(cls, iterations: int, salt: str, encrypted_key: str) -> "EncryptedKey":
        return cls(
            unprotected=EncryptedKeyHeader(
                alg=ALGORITHM, p2c=iterations, p2s=salt,
            ),
            encrypted_key=encrypted_key,
        )

    @classmethod
    def parse(cls, envelope: Any) -> "EncryptedKey":
        """Validate a wire envelope.

        Args:
            envelope: Decoded JSON object.

        Returns:
            Validated, immutable envelope.

        Raises:
            MalformedInput: Naming the first member that failed validation.
        """
        if not isinstance(envelope, Mapping):
            raise MalformedInput(
                f"Envelope must be an object, got {type(envelope).__name__}.",
                field="envelope",
            )
        try:
            return cls.model_validate(dict(envelope))
        except ValidationError as err:
            error = err.errors()[0]
            loc = [part for part in error["loc"] if isinstance(part, str)]
            field = loc[-1] if loc else "envelope"
            if field == "encrypted_key":
                message = f'Invalid or missing "encrypted_key": {error["msg"]}.'
            else:
                message = (
                    f'Invalid or unsupported envelope header "{field}": '
                    f'{error["msg"]}.'
                )
            raise MalformedInput(message, field=field) from None

    @property
    def iterations(self) -> int:
        return self.unprotected.p2c

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        return self.model_dump(mode="json")
