"""Shared builders for claim commands and verifier stubs."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple, Union

from eth_utils import to_checksum_address

from zkemail_ens.codec import ClaimCommand, Proof, encode_command, encode_proof, encode_pubkey_array

OWNER = to_checksum_address("0x00000000000000000000000000000000deadbeef")
PUBKEY = [(index + 1) * 1_000_003 for index in range(17)]
VALID_PROOF = Proof(p_a=(11, 12), p_b=((21, 22), (23, 24)), p_c=(31, 32))


class RecordingVerifier:
    """Proof verifier stub that records every call."""

    def __init__(self, answer: bool = True, error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.calls: List[Tuple[bytes, bytes]] = []

    def verify(self, proof_bytes: bytes, public_signal_bytes: bytes) -> bool:
        self.calls.append((proof_bytes, public_signal_bytes))
        if self.error is not None:
            raise self.error
        return self.answer


def build_command(proof: Union[Proof, bytes] = VALID_PROOF, **overrides) -> ClaimCommand:
    encoded_proof = proof if isinstance(proof, bytes) else encode_proof(proof)
    command = ClaimCommand(
        domain="example.com",
        email="alice@example.com",
        resolver="resolver.eth",
        email_parts=("alice$example", "com"),
        owner=OWNER,
        dkim_signer_hash=(0x0A).to_bytes(32, "big"),
        nullifier=(0x0B).to_bytes(32, "big"),
        timestamp=1_700_000_000,
        account_salt=(0x0C).to_bytes(32, "big"),
        is_code_embedded=True,
        miscellaneous_data=encode_pubkey_array(PUBKEY),
        proof=encoded_proof,
    )
    return replace(command, **overrides)


def command_hex(proof: Union[Proof, bytes] = VALID_PROOF, **overrides) -> str:
    return encode_command(build_command(proof, **overrides)).hex()


WORD = 32
# Word indexes inside an encoded command: word 0 is the outer tuple offset,
# word 1 + n is field n of the tuple head.
HEAD_WORDS = {"outer_offset": 0, "domain_offset": 1, "email_parts_offset": 4, "owner": 5, "is_code_embedded": 10}


def replace_word(payload_hex: str, index: int, word: bytes) -> str:
    data = bytearray(bytes.fromhex(payload_hex))
    data[index * WORD : (index + 1) * WORD] = word.rjust(WORD, b"\x00")
    return data.hex()


def tail_word_index(payload_hex: str, head_field: str) -> int:
    """Index of the length word a dynamic head field points at."""

    data = bytes.fromhex(payload_hex)
    index = HEAD_WORDS[head_field]
    offset = int.from_bytes(data[index * WORD : (index + 1) * WORD], "big")
    return (WORD + offset) // WORD


def hostile_command_hex(case: str) -> str:
    payload = command_hex()
    huge = b"\xff" * WORD
    if case == "outer_offset_huge":
        return replace_word(payload, HEAD_WORDS["outer_offset"], huge)
    if case == "domain_offset_huge":
        return replace_word(payload, HEAD_WORDS["domain_offset"], huge)
    if case == "domain_length_huge":
        return replace_word(payload, tail_word_index(payload, "domain_offset"), huge)
    if case == "email_parts_length_huge":
        return replace_word(payload, tail_word_index(payload, "email_parts_offset"), huge)
    if case == "bool_word_two":
        return replace_word(payload, HEAD_WORDS["is_code_embedded"], b"\x02")
    if case == "owner_dirty_padding":
        return replace_word(payload, HEAD_WORDS["owner"], huge)
    raise KeyError(case)


HOSTILE_CASES = [
    "outer_offset_huge",
    "domain_offset_huge",
    "domain_length_huge",
    "email_parts_length_huge",
    "bool_word_two",
    "owner_dirty_padding",
]
