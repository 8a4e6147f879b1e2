"""Ledger Client.

Password-based key wrapping and proof attachment for ledger operations.
"""
from .version import __version__
from . import keywrap, proofs
from .exceptions import (
    LedgerClientError,
    InvalidArgument,
    InvalidParameterType,
    MalformedInput,
    IntegrityError,
    UnsupportedMode,
    DocumentLoaderError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "keywrap",
    "proofs",
    "LedgerClientError",
    "InvalidArgument",
    "InvalidParameterType",
    "MalformedInput",
    "IntegrityError",
    "UnsupportedMode",
    "DocumentLoaderError",
    "ConfigurationError",
]
