"""Pack byte strings into circuit field elements."""

from __future__ import annotations

from typing import List, Sequence

from .constants import FIELD_CHUNK_BYTES


def field_count(padded_size: int) -> int:
    """Number of field elements produced for ``padded_size`` bytes."""

    return -(-padded_size // FIELD_CHUNK_BYTES)


def pack_bytes(data: bytes, padded_size: int) -> List[int]:
    """Pack ``data`` into little-endian 31-byte field elements.

    The input is right-padded with zero bytes to ``padded_size`` and split into
    consecutive 31-byte chunks; a shorter trailing chunk still yields one
    element. Byte 0 of each chunk is its least significant byte.

    Raises:
        ValueError: if ``padded_size`` is not positive or ``data`` is longer
            than ``padded_size``.
    """

    if padded_size <= 0:
        raise ValueError("padded_size must be positive")
    if len(data) > padded_size:
        raise ValueError(f"data is {len(data)} bytes, exceeds padded size {padded_size}")

    padded = bytes(data) + b"\x00" * (padded_size - len(data))
    return [
        int.from_bytes(padded[start : start + FIELD_CHUNK_BYTES], "little")
        for start in range(0, padded_size, FIELD_CHUNK_BYTES)
    ]


def unpack_fields(fields: Sequence[int], padded_size: int) -> bytes:
    """Reassemble packed field elements into the ``padded_size`` byte buffer."""

    if len(fields) != field_count(padded_size):
        raise ValueError(f"expected {field_count(padded_size)} fields for {padded_size} bytes, got {len(fields)}")
    chunks = []
    for index, value in enumerate(fields):
        width = min(FIELD_CHUNK_BYTES, padded_size - index * FIELD_CHUNK_BYTES)
        chunks.append(int(value).to_bytes(width, "little"))
    return b"".join(chunks)


__all__ = ["field_count", "pack_bytes", "unpack_fields"]
