"""Reject proofs whose coordinates fall outside the base field."""

from __future__ import annotations

from .codec import Proof
from .constants import Q
from .errors import RangeError


def is_within_field(proof: Proof) -> bool:
    return all(0 <= value < Q for _, value in proof.coordinates())


def require_within_field(proof: Proof) -> None:
    """Raise :class:`RangeError` naming the first coordinate ``>= Q``."""

    for label, value in proof.coordinates():
        if not 0 <= value < Q:
            raise RangeError(f"Proof coordinate {label} is not below the field modulus", coordinate=label)


__all__ = ["is_within_field", "require_within_field"]
