"""Validation of zk-email prove-and-claim commands for ENS names."""
from __future__ import annotations

from .codec import ClaimCommand, Proof, decode_command, decode_proof
from .config import ValidatorSettings
from .errors import ClaimValidationError
from .logging_utils import configure_logging
from .snarkjs import load_snarkjs_proof, load_snarkjs_public_signals, proof_from_snarkjs
from .validator import ClaimValidator, ClaimVerdict, is_valid_proof

__all__ = [
    "ClaimCommand",
    "Proof",
    "decode_command",
    "decode_proof",
    "ValidatorSettings",
    "ClaimValidationError",
    "configure_logging",
    "load_snarkjs_proof",
    "load_snarkjs_public_signals",
    "proof_from_snarkjs",
    "ClaimValidator",
    "ClaimVerdict",
    "is_valid_proof",
]
