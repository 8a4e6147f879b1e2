"""
Ledger Client Exceptions.

Every error raised by the package derives from ``LedgerClientError``.
Errors that describe bad caller input also derive from ``ValueError``
(and ``TypeError`` where the input has the wrong type) so existing
``except ValueError`` handlers keep working.
"""
from typing import Optional


class LedgerClientError(Exception):
    """Base class for ledger client errors."""


class InvalidArgument(LedgerClientError, ValueError):
    """A caller-supplied key, password or option is missing or malformed."""


class InvalidParameterType(InvalidArgument, TypeError):
    """A numeric option was given a non-integer value."""


class MalformedInput(LedgerClientError, ValueError):
    """An encrypted-key envelope failed structural or header validation.

    Attributes:
        field: Name of the envelope member that failed validation, if known.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class IntegrityError(LedgerClientError):
    """Key unwrap failed its integrity check.

    Raised for a wrong password, a corrupted envelope or tampering.
    No plaintext is ever attached to this error.
    """


class UnsupportedMode(LedgerClientError, ValueError):
    """Unknown ledger mode requested for proof-of-work parameters."""

    def __init__(self, mode: object):
        super().__init__(
            f'"mode" must be "dev", "test", or "live" (got {mode!r}).'
        )
        self.mode = mode


class DocumentLoaderError(LedgerClientError):
    """A JSON-LD context document could not be retrieved."""


class ConfigurationError(LedgerClientError, ValueError):
    """Settings read from the environment are invalid."""
