"""Convert snarkjs prover output into verifier inputs.

The email prover writes ``proofData.json`` (Groth16 points as decimal strings
in projective form) and ``publicData.json`` (public signals as decimal
strings). The Solidity verifier takes affine points with each G2 coordinate
pair reversed, which :func:`proof_from_snarkjs` takes care of.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from .codec import Proof
from .errors import SchemaDecodeError


def _to_int(value: Any, label: str) -> int:
    try:
        return int(str(value), 10)
    except ValueError as err:
        raise SchemaDecodeError(f"{label} is not a decimal integer: {value!r}") from err


def _pair(values: Sequence[Any], label: str) -> tuple:
    if not isinstance(values, (list, tuple)) or len(values) < 2:
        raise SchemaDecodeError(f"{label} needs a list of at least two coordinates, got {values!r}")
    return (_to_int(values[0], f"{label}[0]"), _to_int(values[1], f"{label}[1]"))


def proof_from_snarkjs(data: Mapping[str, Any]) -> Proof:
    try:
        pi_a, pi_b, pi_c = data["pi_a"], data["pi_b"], data["pi_c"]
    except KeyError as err:
        raise SchemaDecodeError(f"snarkjs proof is missing {err.args[0]}") from err
    if not isinstance(pi_b, (list, tuple)) or len(pi_b) < 2:
        raise SchemaDecodeError(f"pi_b needs two coordinate pairs, got {pi_b!r}")
    x, y = _pair(pi_b[0], "pi_b[0]"), _pair(pi_b[1], "pi_b[1]")
    return Proof(
        p_a=_pair(pi_a, "pi_a"),
        p_b=((x[1], x[0]), (y[1], y[0])),
        p_c=_pair(pi_c, "pi_c"),
    )


def public_signals_from_snarkjs(values: Sequence[Any]) -> List[int]:
    return [_to_int(value, f"public[{index}]") for index, value in enumerate(values)]


def public_signals_to_snarkjs(signals: Sequence[int]) -> List[str]:
    return [str(int(value)) for value in signals]


def load_snarkjs_proof(path: Path | str) -> Proof:
    return proof_from_snarkjs(json.loads(Path(path).read_text(encoding="utf-8")))


def load_snarkjs_public_signals(path: Path | str) -> List[int]:
    return public_signals_from_snarkjs(json.loads(Path(path).read_text(encoding="utf-8")))


__all__ = [
    "proof_from_snarkjs",
    "public_signals_from_snarkjs",
    "public_signals_to_snarkjs",
    "load_snarkjs_proof",
    "load_snarkjs_public_signals",
]
