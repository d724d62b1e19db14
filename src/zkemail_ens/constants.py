"""Circuit-level constants shared by the claim validation pipeline."""

from __future__ import annotations

# BN254 base field. Groth16 proof coordinates live in this field.
Q = 21888242871839275222246405745257275088696311157297823662689037894645226208583

# BN254 scalar field. Every public signal is an element of this field.
SNARK_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617

FIELD_CHUNK_BYTES = 31
FIELD_ELEMENT_BYTES = 32

DOMAIN_FIELDS = 9
DOMAIN_BYTES = 255
EMAIL_FIELDS = 9
EMAIL_BYTES = 256
COMMAND_FIELDS = 20
COMMAND_BYTES = 605
PUBKEY_FIELDS = 17

PUBLIC_SIGNAL_COUNT = 60

COMMAND_PREFIX = "Sign "
EMAIL_SEPARATOR = "@"
EMAIL_PLACEHOLDER = "$"

LOGGER_NAME = "zkemail_ens"

__all__ = [
    "Q",
    "SNARK_SCALAR_FIELD",
    "FIELD_CHUNK_BYTES",
    "FIELD_ELEMENT_BYTES",
    "DOMAIN_FIELDS",
    "DOMAIN_BYTES",
    "EMAIL_FIELDS",
    "EMAIL_BYTES",
    "COMMAND_FIELDS",
    "COMMAND_BYTES",
    "PUBKEY_FIELDS",
    "PUBLIC_SIGNAL_COUNT",
    "COMMAND_PREFIX",
    "EMAIL_SEPARATOR",
    "EMAIL_PLACEHOLDER",
    "LOGGER_NAME",
]
