"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from code_converter.application.options import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_UNIT_SIZE_BYTES,
)
from code_converter.languages import DEFAULT_FALLBACK_EXTENSION


class ConversionOptionsConfig(BaseModel):
    """Validated input for building ``ConversionOptions``."""

    model_config = ConfigDict(extra="forbid")

    preserve_comments: bool = True
    include_types: bool = True
    target_framework: str | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    max_unit_size_bytes: int = Field(default=DEFAULT_MAX_UNIT_SIZE_BYTES, gt=0)
    source_language: str | None = None
    fallback_extension: str = DEFAULT_FALLBACK_EXTENSION
    max_tokens: int = Field(default=4000, gt=0)
    temperature: float = Field(default=0.1, ge=0.0)

    @field_validator("batch_size")
    @classmethod
    def _default_non_positive_batch(cls, value: int) -> int:
        return value if value >= 1 else DEFAULT_BATCH_SIZE

    @field_validator("source_language")
    @classmethod
    def _normalize_language(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip().lower()
        return normalized or None

    @field_validator("fallback_extension")
    @classmethod
    def _validate_extension(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("fallback_extension cannot be empty.")
        return value if value.startswith(".") else f".{value}"


class FileConversionConfig(BaseModel):
    """Validated input for single-file conversion."""

    model_config = ConfigDict(extra="forbid")

    file_path: Path
    target_language: str = Field(min_length=1)
    output_path: Path | None = None

    @field_validator("target_language")
    @classmethod
    def _normalize_target(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("target_language cannot be blank.")
        return normalized


class DirectoryConversionConfig(BaseModel):
    """Validated input for directory conversion."""

    model_config = ConfigDict(extra="forbid")

    directory_path: Path
    target_language: str = Field(min_length=1)
    output_directory: Path | None = None

    @field_validator("target_language")
    @classmethod
    def _normalize_target(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("target_language cannot be blank.")
        return normalized
