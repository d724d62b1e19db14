"""External Groth16 verification backends."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from eth_utils import to_checksum_address
from web3 import Web3
from web3.exceptions import Web3Exception

from .codec import decode_proof_bytes
from .config import VerifierSettings
from .constants import LOGGER_NAME, PUBLIC_SIGNAL_COUNT
from .errors import ClaimValidationError, DecodeError, VerifierError
from .signals import deserialize_public_signals

LOGGER = logging.getLogger(LOGGER_NAME)

GROTH16_VERIFIER_ABI: List[dict] = [
    {
        "type": "function",
        "name": "verifyProof",
        "stateMutability": "view",
        "inputs": [
            {"name": "_pA", "type": "uint256[2]"},
            {"name": "_pB", "type": "uint256[2][2]"},
            {"name": "_pC", "type": "uint256[2]"},
            {"name": "_pubSignals", "type": f"uint256[{PUBLIC_SIGNAL_COUNT}]"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    }
]


class ProofVerifier(Protocol):
    """Anything that can check a proof against serialized public signals."""

    def verify(self, proof_bytes: bytes, public_signal_bytes: bytes) -> bool:
        ...


class Groth16ContractVerifier:
    """Verify proofs with a snarkjs-generated Solidity verifier contract.

    Only the ``verifyProof`` view function is called; nothing is submitted
    on-chain.
    """

    def __init__(self, contract: Any):
        self._contract = contract

    @classmethod
    def from_provider(
        cls,
        provider_url: str,
        contract_address: str,
        web3: Optional[Web3] = None,
    ) -> "Groth16ContractVerifier":
        w3 = web3 or Web3(Web3.HTTPProvider(provider_url))
        contract = w3.eth.contract(address=to_checksum_address(contract_address), abi=GROTH16_VERIFIER_ABI)
        return cls(contract)

    def verify(self, proof_bytes: bytes, public_signal_bytes: bytes) -> bool:
        try:
            proof = decode_proof_bytes(proof_bytes)
            signals = deserialize_public_signals(public_signal_bytes)
        except (DecodeError, ValueError) as err:
            raise VerifierError(f"Verifier inputs are malformed: {err}") from err
        p_a, p_b, p_c = proof.as_abi_tuple()
        try:
            result = self._contract.functions.verifyProof(p_a, p_b, p_c, signals).call()
        except (Web3Exception, ValueError, OSError) as err:
            LOGGER.error(
                "Verifier contract call failed",
                extra={"event": "verifier_call_failed", "data": {"error": str(err)}},
            )
            raise VerifierError(f"Verifier contract call failed: {err}") from err
        LOGGER.debug("Verifier contract answered", extra={"event": "verifier_answer", "data": {"valid": bool(result)}})
        return bool(result)


def build_verifier(settings: VerifierSettings, web3: Optional[Web3] = None) -> Groth16ContractVerifier:
    if not settings.contract_address:
        raise ClaimValidationError("No verifier contract address configured", stage="configure")
    if web3 is None and not settings.provider_url:
        raise ClaimValidationError("No Ethereum provider configured for the verifier", stage="configure")
    return Groth16ContractVerifier.from_provider(settings.provider_url or "", settings.contract_address, web3=web3)


__all__ = ["GROTH16_VERIFIER_ABI", "ProofVerifier", "Groth16ContractVerifier", "build_verifier"]
