"""
Collaborator interfaces for proof attachment.

Signing and proof-of-work search are performed by external services; this
package only marshals their parameters. Anything with a matching async
method can be passed in.
"""
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Optional, Protocol, TypedDict

WEB_LEDGER_CONTEXT_V1_URL = "https://w3id.org/webledger/v1"
VERES_ONE_CONTEXT_V1_URL = "https://w3id.org/veres-one/v1"


class RemoteDocument(TypedDict):
    """JSON-LD remote document as returned by a document loader."""
    contextUrl: Optional[str]
    documentUrl: str
    document: Any


DocumentLoader = Callable[[str], Awaitable[RemoteDocument]]


class DocumentSigner(Protocol):
    """Linked-data signature service."""

    async def sign(
        self,
        document: Mapping[str, Any],
        *,
        algorithm: str,
        creator: str,
        private_key: str,
        proof: dict[str, Any],
        document_loader: Optional[DocumentLoader] = None,
    ) -> dict[str, Any]:
        ...


class ProofOfWorkProver(Protocol):
    """Proof-of-work service."""

    async def prove(
        self,
        document: Mapping[str, Any],
        *,
        algorithm: str,
        parameters: dict[str, int],
    ) -> dict[str, Any]:
        ...
