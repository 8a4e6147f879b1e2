"""
Ed25519 signature proofs for ledger operations.
"""
import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
)

from ..exceptions import InvalidArgument
from .base import WEB_LEDGER_CONTEXT_V1_URL, DocumentLoader, DocumentSigner

logger = logging.getLogger("ledger.client.proofs")

SIGNATURE_ALGORITHM = "Ed25519Signature2018"


class SignatureProofOptions(BaseModel):
    """Options for :func:`attach_signature_proof`.

    Accepts snake_case names or the camelCase names used on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    capability: StrictStr = Field(min_length=1)
    capability_action: StrictStr = Field(
        min_length=1,
        validation_alias=AliasChoices("capability_action", "capabilityAction"),
    )
    creator: StrictStr = Field(min_length=1)
    private_key: StrictStr = Field(
        min_length=1,
        repr=False,
        validation_alias=AliasChoices(
            "private_key", "privateKey", "privateKeyBase58"
        ),
    )
    proof_purpose: StrictStr = Field(
        min_length=1,
        validation_alias=AliasChoices("proof_purpose", "proofPurpose"),
    )

    @classmethod
    def parse(
        cls, options: Union["SignatureProofOptions", Mapping[str, Any]]
    ) -> "SignatureProofOptions":
        """Validate options, raising InvalidArgument on the first bad one."""
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise InvalidArgument("Signature proof options must be a mapping.")
        try:
            return cls.model_validate(dict(options))
        except ValidationError as err:
            error = err.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            # never echo the input, it may hold the private key
            raise InvalidArgument(
                f'Invalid signature proof option "{field}": {error["msg"]}.'
            ) from None


async def attach_signature_proof(
    operation: Mapping[str, Any],
    options: Union[SignatureProofOptions, Mapping[str, Any]],
    *,
    signer: DocumentSigner,
    document_loader: Optional[DocumentLoader] = None,
) -> dict[str, Any]:
    """Add an Ed25519 signature proof to an operation.

    Args:
        operation: The operation document to sign. It is not modified.
        options: ``capability``, ``capabilityAction``, ``creator``,
            ``privateKeyBase58`` and ``proofPurpose``.
        signer: Service performing the actual signature.
        document_loader: Resolver for JSON-LD contexts, passed to the signer.

    Returns:
        The signed operation returned by ``signer``.

    Raises:
        InvalidArgument: If ``operation`` is not a mapping or an option
            is missing.
    """
    if not isinstance(operation, Mapping):
        raise InvalidArgument('"operation" must be a mapping.')
    opts = SignatureProofOptions.parse(options)

    proof = {
        "@context": WEB_LEDGER_CONTEXT_V1_URL,
        "proofPurpose": opts.proof_purpose,
        "capability": opts.capability,
        "capabilityAction": opts.capability_action,
    }
    logger.debug(
        "Attaching %s proof: creator=%s purpose=%s",
        SIGNATURE_ALGORITHM, opts.creator, opts.proof_purpose,
    )
    return await signer.sign(
        copy.deepcopy(dict(operation)),
        algorithm=SIGNATURE_ALGORITHM,
        creator=opts.creator,
        private_key=opts.private_key,
        proof=proof,
        document_loader=document_loader,
    )
