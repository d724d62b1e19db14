"""Match dot-separated email parts against the claimed email address.

The circuit exposes the address as dot-separated parts in which the ``@``
separator is replaced by a ``$`` placeholder, so ``alice@example.com`` arrives
as ``["alice$example", "com"]``. Reconstruction therefore needs the
placeholder substitution rather than literal equality.
"""

from __future__ import annotations

from typing import Sequence

from .constants import EMAIL_PLACEHOLDER, EMAIL_SEPARATOR

_SEPARATOR = EMAIL_SEPARATOR.encode()[0]
_PLACEHOLDER = EMAIL_PLACEHOLDER.encode()[0]


def compose_email(parts: Sequence[str]) -> str:
    return ".".join(parts)


def email_parts_match(parts: Sequence[str], email: str) -> bool:
    """Return ``True`` when ``parts`` reconstruct ``email`` byte for byte.

    Wherever ``email`` holds ``@`` the reconstruction must hold ``$``; every
    other byte must be identical.
    """

    composed = compose_email(parts).encode("utf-8")
    expected = email.encode("utf-8")
    if len(composed) != len(expected):
        return False
    for actual, wanted in zip(composed, expected):
        if wanted == _SEPARATOR:
            if actual != _PLACEHOLDER:
                return False
        elif actual != wanted:
            return False
    return True


__all__ = ["compose_email", "email_parts_match"]
