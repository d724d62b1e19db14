"""Exception hierarchy for claim validation failures."""

from __future__ import annotations

from typing import Optional


class ClaimValidationError(RuntimeError):
    """Base class for every rejection raised while validating a claim."""

    stage = "validate"

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class DecodeError(ClaimValidationError):
    """Raised when a payload cannot be decoded into its typed record."""

    stage = "decode"


class HexDecodeError(DecodeError):
    """Raised when the payload text is not valid hexadecimal."""


class SchemaDecodeError(DecodeError):
    """Raised when decoded bytes do not satisfy the declared ABI schema."""


class RangeError(ClaimValidationError):
    """Raised when a proof coordinate is not below the field modulus."""

    stage = "range_check"

    def __init__(self, message: str, *, coordinate: str) -> None:
        super().__init__(message)
        self.coordinate = coordinate


class EmailMismatchError(ClaimValidationError):
    """Raised when the email parts do not reconstruct the claimed email."""

    stage = "email_check"


class VerifierError(ClaimValidationError):
    """Raised when the external proof verifier fails to produce an answer."""

    stage = "verify"


__all__ = [
    "ClaimValidationError",
    "DecodeError",
    "HexDecodeError",
    "SchemaDecodeError",
    "RangeError",
    "EmailMismatchError",
    "VerifierError",
]
