"""Prove-and-claim command validation pipeline.

A command is accepted only when every stage passes, in order:

``decode_command -> decode_proof -> range_check -> email_check ->
build_signal -> verify``

The first failing stage rejects the claim. Callers of
:func:`is_valid_proof` only ever see ``True`` or ``False``; the failing stage
and error kind are logged and returned in :class:`ClaimVerdict` by
:meth:`ClaimValidator.evaluate`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from web3 import Web3

from .codec import decode_command, decode_hex_payload, decode_proof
from .config import ValidatorSettings
from .constants import LOGGER_NAME
from .email_parts import email_parts_match
from .errors import ClaimValidationError, EmailMismatchError, VerifierError
from .logging_utils import configure_logging
from .ranges import require_within_field
from .signals import public_signal_bytes
from .verifier import ProofVerifier, build_verifier

LOGGER = logging.getLogger(LOGGER_NAME)


@dataclass
class ClaimVerdict:
    """Outcome of validating one command."""

    accepted: bool
    stage: str
    reason: Optional[str] = None

    def require_accepted(self) -> None:
        if not self.accepted:
            raise PermissionError(self.reason or f"Claim rejected at {self.stage}")


class ClaimValidator:
    def __init__(self, verifier: ProofVerifier, *, strict_pubkey: bool = False):
        self.verifier = verifier
        self.strict_pubkey = strict_pubkey

    @classmethod
    def from_settings(cls, settings: ValidatorSettings, web3: Optional[Web3] = None) -> "ClaimValidator":
        log_file = settings.resolved_log_file()
        configure_logging(str(log_file) if log_file else None, level=settings.logging.level)
        return cls(build_verifier(settings.verifier, web3=web3), strict_pubkey=settings.strict_pubkey_decoding)

    def evaluate(self, hex_command: str) -> ClaimVerdict:
        stage = "decode_command"
        try:
            command = decode_command(hex_command)

            stage = "decode_proof"
            proof = decode_proof(command.proof.hex())

            stage = "range_check"
            require_within_field(proof)

            stage = "email_check"
            if not email_parts_match(command.email_parts, command.email):
                raise EmailMismatchError("Email parts do not reconstruct the claimed email")

            stage = "build_signal"
            signals = public_signal_bytes(command, strict_pubkey=self.strict_pubkey)

            stage = "verify"
            proof_bytes = decode_hex_payload(command.proof.hex())
            valid = self._call_verifier(proof_bytes, signals)
        except ClaimValidationError as err:
            LOGGER.warning(
                "Claim rejected",
                extra={
                    "event": "claim_rejected",
                    "data": {"stage": stage, "kind": type(err).__name__, "reason": str(err)},
                },
            )
            return ClaimVerdict(False, stage, str(err))

        if not valid:
            LOGGER.warning(
                "Claim rejected",
                extra={"event": "claim_rejected", "data": {"stage": stage, "kind": "InvalidProof"}},
            )
            return ClaimVerdict(False, stage, "Proof rejected by verifier")

        LOGGER.info(
            "Claim accepted",
            extra={"event": "claim_accepted", "data": {"domain": command.domain, "owner": command.owner}},
        )
        return ClaimVerdict(True, "accept")

    def is_valid_proof(self, hex_command: str) -> bool:
        return self.evaluate(hex_command).accepted

    def _call_verifier(self, proof_bytes: bytes, signals: bytes) -> bool:
        try:
            return bool(self.verifier.verify(proof_bytes, signals))
        except VerifierError:
            raise
        except Exception as exc:
            LOGGER.exception("Proof verifier raised", extra={"event": "verifier_error"})
            raise VerifierError(f"Proof verifier raised {type(exc).__name__}: {exc}") from exc


def is_valid_proof(hex_command: str, verifier: ProofVerifier, *, strict_pubkey: bool = False) -> bool:
    """Return ``True`` iff ``hex_command`` carries a valid claim proof."""

    return ClaimValidator(verifier, strict_pubkey=strict_pubkey).is_valid_proof(hex_command)


__all__ = ["ClaimVerdict", "ClaimValidator", "is_valid_proof"]
