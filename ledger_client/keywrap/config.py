"""
Key Wrap Configuration — Validated settings for key unwrapping.

Reads optional overrides from environment variables:
    LEDGER_KEYWRAP_MAX_ITERATIONS = <positive integer>

Security Note:
    Never log passwords or key material. Only log parameters.
"""
import os
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

logger = logging.getLogger("ledger.client.keywrap")

# Fixed wrap parameters, shared with every implementation of the envelope.
ALGORITHM = "PBES2-HS512+A256KW"
ITERATIONS = 4096
SALT_SIZE = 32
KEY_LENGTH = 32  # AES-256
HASH_NAME = "SHA-512"
# largest iteration count any PBKDF2 backend accepts (signed 32-bit)
MAX_ITERATIONS = 2**31 - 1


def _env_int(name: str) -> Optional[int]:
    """Read an integer environment variable, ``None`` when unset or blank.

    Raises:
        ValueError: If the value is not a valid integer.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class KeyWrapConfig(BaseModel):
    """Validated key wrap configuration.

    ``max_iterations`` caps the PBKDF2 iteration count accepted from an
    envelope on unwrap. ``None`` (the default) accepts any count.
    """

    max_iterations: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("max_iterations")
    @classmethod
    def validate_max_iterations(cls, v: Optional[int]) -> Optional[int]:
        """The cap may not forbid envelopes produced by this package."""
        if v is not None and v < ITERATIONS:
            raise ValueError(
                f"max_iterations must be at least {ITERATIONS}, got {v}"
            )
        return v

    def allows(self, iterations: int) -> bool:
        """Return True if ``iterations`` is within the configured cap."""
        return self.max_iterations is None or iterations <= self.max_iterations

    @classmethod
    def from_env(cls) -> "KeyWrapConfig":
        """Create KeyWrapConfig by loading values from environment.

        Returns:
            Populated KeyWrapConfig instance.

        Raises:
            ConfigurationError: If an environment value is invalid.
        """
        values = {}
        try:
            max_iterations = _env_int("LEDGER_KEYWRAP_MAX_ITERATIONS")
            if max_iterations is not None:
                values["max_iterations"] = max_iterations
            config = cls(**values)
        except ValidationError as err:
            message = err.errors()[0]["msg"]
            raise ConfigurationError(
                f"Invalid LEDGER_KEYWRAP_MAX_ITERATIONS: {message}"
            ) from None
        except ValueError as err:
            raise ConfigurationError(str(err)) from None
        logger.debug("Key wrap config: max_iterations=%s", config.max_iterations)
        return config
