"""Extraction configuration model.

Config structure (``.artex/config.yml``):
    extractors:
      - Java
      - React/TypeScript
      - CSS
    log_level: INFO

``extractors`` both enables extractors and fixes their orchestration order.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from artex.domain.constants import DEFAULT_EXTRACTORS, DEFAULT_LOG_LEVEL

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


class ArtexConfig(BaseModel):
    """Validated, merged configuration."""

    model_config = ConfigDict(extra="forbid")

    extractors: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTRACTORS))
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("extractors")
    @classmethod
    def _extractors_non_empty_unique(cls, v: list[str]) -> list[str]:
        cleaned = [key.strip() for key in v]
        if not cleaned or any(not key for key in cleaned):
            raise ValueError("extractors must be a non-empty list of extractor ids")
        duplicates = sorted({key for key in cleaned if cleaned.count(key) > 1})
        if duplicates:
            raise ValueError(f"Duplicate extractor ids: {duplicates}")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{v}'"
            )
        return level

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "ArtexConfig":
        return cls.model_validate(data)
