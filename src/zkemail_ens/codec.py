"""ABI decoding of prove-and-claim commands and Groth16 proofs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, to_checksum_address

from .constants import LOGGER_NAME, PUBKEY_FIELDS
from .errors import HexDecodeError, SchemaDecodeError

LOGGER = logging.getLogger(LOGGER_NAME)

COMMAND_ABI_TYPE = "(string,string,string,string[],address,bytes32,bytes32,uint256,bytes32,bool,bytes,bytes)"
PROOF_ABI_TYPE = "(uint256[2],uint256[2][2],uint256[2])"
PUBKEY_ABI_TYPE = f"uint256[{PUBKEY_FIELDS}]"

Pair = Tuple[int, int]


@dataclass(frozen=True)
class ClaimCommand:
    """A decoded prove-and-claim command."""

    domain: str
    email: str
    resolver: str
    email_parts: Tuple[str, ...]
    owner: str
    dkim_signer_hash: bytes
    nullifier: bytes
    timestamp: int
    account_salt: bytes
    is_code_embedded: bool
    miscellaneous_data: bytes
    proof: bytes

    def as_abi_tuple(self) -> tuple:
        return (
            self.domain,
            self.email,
            self.resolver,
            list(self.email_parts),
            self.owner,
            self.dkim_signer_hash,
            self.nullifier,
            self.timestamp,
            self.account_salt,
            self.is_code_embedded,
            self.miscellaneous_data,
            self.proof,
        )


@dataclass(frozen=True)
class Proof:
    """Groth16 proof points in Solidity verifier order."""

    p_a: Pair
    p_b: Tuple[Pair, Pair]
    p_c: Pair

    def coordinates(self) -> Iterator[Tuple[str, int]]:
        """Yield the eight scalar coordinates with a readable label."""

        yield "pA[0]", self.p_a[0]
        yield "pA[1]", self.p_a[1]
        yield "pB[0][0]", self.p_b[0][0]
        yield "pB[0][1]", self.p_b[0][1]
        yield "pB[1][0]", self.p_b[1][0]
        yield "pB[1][1]", self.p_b[1][1]
        yield "pC[0]", self.p_c[0]
        yield "pC[1]", self.p_c[1]

    def as_abi_tuple(self) -> tuple:
        return (list(self.p_a), [list(row) for row in self.p_b], list(self.p_c))


def decode_hex_payload(text: str) -> bytes:
    """Hex-decode ``text``; an optional ``0x`` prefix is accepted."""

    try:
        return decode_hex(text)
    except (TypeError, ValueError) as err:
        raise HexDecodeError(f"Payload is not valid hex: {err}") from err


def _abi_decode(abi_type: str, data: bytes) -> object:
    try:
        (value,) = decode([abi_type], data)
    except (DecodingError, ValueError, OverflowError) as err:
        raise SchemaDecodeError(f"Payload does not match {abi_type}: {err}") from err
    return value


def decode_command(hex_command: str) -> ClaimCommand:
    """Decode an ABI-encoded ``ProveAndClaimCommand`` from hex text."""

    raw = decode_hex_payload(hex_command)
    (
        domain,
        email,
        resolver,
        email_parts,
        owner,
        dkim_signer_hash,
        nullifier,
        timestamp,
        account_salt,
        is_code_embedded,
        miscellaneous_data,
        proof,
    ) = _abi_decode(COMMAND_ABI_TYPE, raw)
    command = ClaimCommand(
        domain=domain,
        email=email,
        resolver=resolver,
        email_parts=tuple(email_parts),
        owner=to_checksum_address(owner),
        dkim_signer_hash=bytes(dkim_signer_hash),
        nullifier=bytes(nullifier),
        timestamp=int(timestamp),
        account_salt=bytes(account_salt),
        is_code_embedded=bool(is_code_embedded),
        miscellaneous_data=bytes(miscellaneous_data),
        proof=bytes(proof),
    )
    LOGGER.debug(
        "Claim command decoded",
        extra={"event": "command_decoded", "data": {"domain": domain, "owner": command.owner}},
    )
    return command


def decode_proof(hex_proof: str) -> Proof:
    """Decode an ABI-encoded Groth16 proof from hex text."""

    return decode_proof_bytes(decode_hex_payload(hex_proof))


def decode_proof_bytes(data: bytes) -> Proof:
    p_a, p_b, p_c = _abi_decode(PROOF_ABI_TYPE, data)
    return Proof(
        p_a=(int(p_a[0]), int(p_a[1])),
        p_b=((int(p_b[0][0]), int(p_b[0][1])), (int(p_b[1][0]), int(p_b[1][1]))),
        p_c=(int(p_c[0]), int(p_c[1])),
    )


def decode_pubkey_array(data: bytes) -> Tuple[int, ...]:
    """Decode the DKIM public key limbs carried in the miscellaneous data."""

    return tuple(int(limb) for limb in _abi_decode(PUBKEY_ABI_TYPE, data))


def encode_command(command: ClaimCommand) -> bytes:
    try:
        return encode([COMMAND_ABI_TYPE], [command.as_abi_tuple()])
    except EncodingError as err:
        raise SchemaDecodeError(f"Command cannot be encoded: {err}") from err


def encode_proof(proof: Proof) -> bytes:
    try:
        return encode([PROOF_ABI_TYPE], [proof.as_abi_tuple()])
    except EncodingError as err:
        raise SchemaDecodeError(f"Proof cannot be encoded: {err}") from err


def encode_pubkey_array(values: Sequence[int]) -> bytes:
    if len(values) != PUBKEY_FIELDS:
        raise SchemaDecodeError(f"Public key array needs {PUBKEY_FIELDS} limbs, got {len(values)}")
    try:
        return encode([PUBKEY_ABI_TYPE], [list(values)])
    except EncodingError as err:
        raise SchemaDecodeError(f"Public key array cannot be encoded: {err}") from err


__all__ = [
    "COMMAND_ABI_TYPE",
    "PROOF_ABI_TYPE",
    "PUBKEY_ABI_TYPE",
    "ClaimCommand",
    "Proof",
    "decode_hex_payload",
    "decode_command",
    "decode_proof",
    "decode_proof_bytes",
    "decode_pubkey_array",
    "encode_command",
    "encode_proof",
    "encode_pubkey_array",
]
