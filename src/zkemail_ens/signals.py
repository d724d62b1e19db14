"""Public signal construction for the email-claim circuit.

The verifier expects 60 field elements in the circuit's declared input order.
:data:`SIGNAL_LAYOUT` records that order as named slot ranges so each field
group can be located and audited on its own.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Sequence

from .codec import ClaimCommand, decode_pubkey_array
from .constants import (
    COMMAND_BYTES,
    COMMAND_FIELDS,
    COMMAND_PREFIX,
    DOMAIN_BYTES,
    DOMAIN_FIELDS,
    EMAIL_BYTES,
    EMAIL_FIELDS,
    FIELD_ELEMENT_BYTES,
    LOGGER_NAME,
    PUBKEY_FIELDS,
    PUBLIC_SIGNAL_COUNT,
)
from .errors import ClaimValidationError, SchemaDecodeError
from .packing import pack_bytes

LOGGER = logging.getLogger(LOGGER_NAME)


class SignalSlot(NamedTuple):
    name: str
    offset: int
    count: int

    @property
    def end(self) -> int:
        return self.offset + self.count


SIGNAL_LAYOUT = (
    SignalSlot("domain", 0, DOMAIN_FIELDS),
    SignalSlot("dkim_signer_hash", 9, 1),
    SignalSlot("nullifier", 10, 1),
    SignalSlot("timestamp", 11, 1),
    SignalSlot("masked_command", 12, COMMAND_FIELDS),
    SignalSlot("account_salt", 32, 1),
    SignalSlot("is_code_embedded", 33, 1),
    SignalSlot("pubkey", 34, PUBKEY_FIELDS),
    SignalSlot("email", 51, EMAIL_FIELDS),
)

SLOTS: Dict[str, SignalSlot] = {slot.name: slot for slot in SIGNAL_LAYOUT}


def masked_command(command: ClaimCommand) -> str:
    return COMMAND_PREFIX + command.resolver


def _place(signals: List[int], name: str, values: Sequence[int]) -> None:
    slot = SLOTS[name]
    if len(values) > slot.count:
        raise ClaimValidationError(
            f"{name} needs {len(values)} signals but only {slot.count} are allotted",
            stage="build_signal",
        )
    signals[slot.offset : slot.offset + len(values)] = values


def _pack_text(name: str, text: str, padded_size: int) -> List[int]:
    try:
        return pack_bytes(text.encode("utf-8"), padded_size)
    except ValueError as err:
        raise ClaimValidationError(f"{name} does not fit the circuit: {err}", stage="build_signal") from err


def build_public_signals(command: ClaimCommand, *, strict_pubkey: bool = False) -> List[int]:
    """Lay out the 60 public signals for ``command``.

    Slots a packed field does not fill stay zero. When the public key array
    in ``miscellaneous_data`` cannot be decoded its slots are left zero and a
    warning is logged, unless ``strict_pubkey`` is set, in which case the
    :class:`SchemaDecodeError` propagates.
    """

    signals = [0] * PUBLIC_SIGNAL_COUNT
    _place(signals, "domain", _pack_text("domain", command.domain, DOMAIN_BYTES))
    _place(signals, "dkim_signer_hash", [int.from_bytes(command.dkim_signer_hash, "big")])
    _place(signals, "nullifier", [int.from_bytes(command.nullifier, "big")])
    _place(signals, "timestamp", [command.timestamp])
    _place(
        signals,
        "masked_command",
        _pack_text("masked_command", masked_command(command), COMMAND_BYTES),
    )
    _place(signals, "account_salt", [int.from_bytes(command.account_salt, "big")])
    _place(signals, "is_code_embedded", [1 if command.is_code_embedded else 0])

    try:
        pubkey = decode_pubkey_array(command.miscellaneous_data)
    except SchemaDecodeError as err:
        if strict_pubkey:
            raise SchemaDecodeError(f"Public key array is malformed: {err}", stage="build_signal") from err
        LOGGER.warning(
            "Public key array could not be decoded, leaving its signals at zero",
            extra={"event": "pubkey_decode_failed", "data": {"error": str(err)}},
        )
    else:
        _place(signals, "pubkey", pubkey)

    _place(signals, "email", _pack_text("email", command.email, EMAIL_BYTES))
    return signals


def serialize_public_signals(signals: Sequence[int]) -> bytes:
    """Render each signal as a 32-byte big-endian word, in slot order."""

    if len(signals) != PUBLIC_SIGNAL_COUNT:
        raise ValueError(f"expected {PUBLIC_SIGNAL_COUNT} signals, got {len(signals)}")
    return b"".join(int(value).to_bytes(FIELD_ELEMENT_BYTES, "big") for value in signals)


def deserialize_public_signals(data: bytes) -> List[int]:
    expected = PUBLIC_SIGNAL_COUNT * FIELD_ELEMENT_BYTES
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes of public signals, got {len(data)}")
    return [
        int.from_bytes(data[start : start + FIELD_ELEMENT_BYTES], "big")
        for start in range(0, expected, FIELD_ELEMENT_BYTES)
    ]


def public_signal_bytes(command: ClaimCommand, *, strict_pubkey: bool = False) -> bytes:
    return serialize_public_signals(build_public_signals(command, strict_pubkey=strict_pubkey))


__all__ = [
    "SignalSlot",
    "SIGNAL_LAYOUT",
    "SLOTS",
    "masked_command",
    "build_public_signals",
    "serialize_public_signals",
    "deserialize_public_signals",
    "public_signal_bytes",
]
