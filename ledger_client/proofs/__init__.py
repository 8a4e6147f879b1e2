"""Proofs — Signature and proof-of-work proofs for ledger operations.

Signing and Equihash solving are delegated to injected services; this
package validates options and builds the proof parameters.
"""

from .signature import SignatureProofOptions, attach_signature_proof
from .equihash import (
    EQUIHASH_PARAMETERS,
    ProofOfWorkOptions,
    attach_proof_of_work_proof,
    equihash_parameters,
)
from .loader import ContextDocumentLoader, fetch_remote_document
from .base import (
    WEB_LEDGER_CONTEXT_V1_URL,
    VERES_ONE_CONTEXT_V1_URL,
    DocumentSigner,
    ProofOfWorkProver,
    RemoteDocument,
)

__all__ = [
    "SignatureProofOptions",
    "attach_signature_proof",
    "EQUIHASH_PARAMETERS",
    "ProofOfWorkOptions",
    "attach_proof_of_work_proof",
    "equihash_parameters",
    "ContextDocumentLoader",
    "fetch_remote_document",
    "WEB_LEDGER_CONTEXT_V1_URL",
    "VERES_ONE_CONTEXT_V1_URL",
    "DocumentSigner",
    "ProofOfWorkProver",
    "RemoteDocument",
]
