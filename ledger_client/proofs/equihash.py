"""
Equihash proof-of-work proofs for ledger operations.

Parameters are either given explicitly (N and K) or picked from the ledger
mode:

    ====== ===== ===
    mode     N    K
    ====== ===== ===
    dev      64   3
    test     64   3
    live    144   5
    ====== ===== ===
"""
import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..exceptions import InvalidArgument, InvalidParameterType, UnsupportedMode
from .base import ProofOfWorkProver

logger = logging.getLogger("ledger.client.proofs")

PROOF_OF_WORK_ALGORITHM = "EquihashProof2018"

EQUIHASH_PARAMETERS: dict[str, tuple[int, int]] = {
    "dev": (64, 3),
    "test": (64, 3),
    # TODO: read live parameters from the ledger configuration once exposed
    "live": (144, 5),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ProofOfWorkOptions(BaseModel):
    """Options for :func:`attach_proof_of_work_proof`.

    Explicit N/K take precedence over ``mode``. Types are checked when the
    parameters are resolved so the caller gets a ``TypeError`` subclass.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: Optional[Any] = None
    equihash_parameter_n: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices(
            "equihash_parameter_n", "equihashParameterN"
        ),
    )
    equihash_parameter_k: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices(
            "equihash_parameter_k", "equihashParameterK"
        ),
    )

    @classmethod
    def parse(
        cls, options: Union["ProofOfWorkOptions", Mapping[str, Any]]
    ) -> "ProofOfWorkOptions":
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise InvalidArgument("Proof-of-work options must be a mapping.")
        return cls.model_validate(dict(options))

    def parameters(self) -> dict[str, int]:
        """Resolve the Equihash ``{"n", "k"}`` parameters.

        Raises:
            InvalidArgument: If only one of N and K is given.
            InvalidParameterType: If N or K is not an integer.
            InvalidArgument: If N or K is not positive.
            UnsupportedMode: If no N/K is given and ``mode`` is unknown.
        """
        n = self.equihash_parameter_n
        k = self.equihash_parameter_k
        if n is not None or k is not None:
            if n is None or k is None:
                raise InvalidArgument(
                    "`equihashParameterN` and `equihashParameterK` must be "
                    "given together."
                )
            if not (_is_int(n) and _is_int(k)):
                raise InvalidParameterType(
                    "`equihashParameterN` and `equihashParameterK` must be "
                    "integers."
                )
            if n < 1 or k < 1:
                raise InvalidArgument(
                    "`equihashParameterN` and `equihashParameterK` must be "
                    f"positive, got n={n} k={k}."
                )
            return {"n": n, "k": k}
        try:
            n, k = EQUIHASH_PARAMETERS[self.mode]
        except (KeyError, TypeError):
            raise UnsupportedMode(self.mode) from None
        return {"n": n, "k": k}


def equihash_parameters(
    options: Union[ProofOfWorkOptions, Mapping[str, Any]]
) -> dict[str, int]:
    """Return the Equihash parameters selected by ``options``."""
    return ProofOfWorkOptions.parse(options).parameters()


async def attach_proof_of_work_proof(
    operation: Mapping[str, Any],
    options: Union[ProofOfWorkOptions, Mapping[str, Any]],
    *,
    prover: ProofOfWorkProver,
) -> dict[str, Any]:
    """Add an Equihash proof of work to an operation.

    Args:
        operation: The operation document. It is not modified.
        options: ``mode`` and/or ``equihashParameterN``/``equihashParameterK``.
        prover: Service performing the proof-of-work search.

    Returns:
        The operation with the proof attached, as returned by ``prover``.
    """
    if not isinstance(operation, Mapping):
        raise InvalidArgument('"operation" must be a mapping.')
    parameters = equihash_parameters(options)
    logger.debug(
        "Attaching %s proof: n=%d k=%d",
        PROOF_OF_WORK_ALGORITHM, parameters["n"], parameters["k"],
    )
    return await prover.prove(
        copy.deepcopy(dict(operation)),
        algorithm=PROOF_OF_WORK_ALGORITHM,
        parameters=parameters,
    )
