"""Configuration models and helpers for the claim validator."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, Field, PrivateAttr, field_validator


class VerifierSettings(BaseModel):
    provider_url: Optional[str] = Field(None, description="Ethereum JSON-RPC endpoint")
    contract_address: Optional[str] = Field(
        None,
        description="Address of the deployed Groth16 verifier contract",
    )

    @field_validator("contract_address")
    @classmethod
    def ensure_address(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not is_address(value):
            raise ValueError("contract_address must be a 20-byte hex address")
        return to_checksum_address(value)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def ensure_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized


class ValidatorSettings(BaseModel):
    verifier: VerifierSettings = Field(default_factory=VerifierSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    strict_pubkey_decoding: bool = Field(
        False,
        description="Reject claims whose public key array cannot be decoded instead of zero-filling it",
    )
    _base_path: Path = PrivateAttr(default=Path("."))

    @classmethod
    def load(cls, path: Path | str) -> "ValidatorSettings":
        file_path = Path(path)
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        instance = cls.model_validate(data)
        instance._base_path = file_path.parent.resolve()
        return instance

    def resolve_path(self, relative: str) -> Path:
        return (self._base_path / relative).resolve()

    def resolved_log_file(self) -> Optional[Path]:
        if not self.logging.log_file:
            return None
        return self.resolve_path(self.logging.log_file)


__all__ = ["ValidatorSettings", "VerifierSettings", "LoggingSettings"]
