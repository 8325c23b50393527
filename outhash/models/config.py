"""Hashing, host output and plugin configuration models."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OutputOptions(BaseModel):
    """The host pipeline's output settings.

    Hashing parameters are inherited from here rather than configured
    separately, so the names follow the host's conventions.
    """

    model_config = ConfigDict(frozen=True)

    path: Path | None = None  # emission directory; None skips emission
    hash_function: str = "md5"
    hash_digest: str = "hex"
    hash_digest_length: int = Field(default=20, gt=0)
    hash_salt: str | bytes | None = None


class HashConfig(BaseModel):
    """Digest parameters for one pipeline run."""

    model_config = ConfigDict(frozen=True)

    algorithm: str = "md5"
    digest_encoding: str = "hex"
    digest_length: int = Field(default=20, gt=0)
    salt: bytes | None = None

    @field_validator("salt", mode="before")
    @classmethod
    def _encode_salt(cls, value: str | bytes | None) -> bytes | None:
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    @classmethod
    def from_output_options(cls, options: OutputOptions) -> HashConfig:
        """Build the run's HashConfig from the host output settings."""
        return cls(
            algorithm=options.hash_function,
            digest_encoding=options.hash_digest,
            digest_length=options.hash_digest_length,
            salt=options.hash_salt or None,
        )


class PluginOptions(BaseModel):
    """Options accepted by ``OutputHashPlugin``.

    ``index_artifact_names`` holds logical chunk names (``"vendor"``) or the
    names of unhashed assets (``"index.html"``), never hash-bearing filenames.
    """

    model_config = ConfigDict(frozen=True)

    index_artifact_names: frozenset[str] = frozenset()
    validate_output: bool = False
    validate_output_pattern: str = r"^.*$"

    @field_validator("validate_output_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"Invalid validate_output_pattern {value!r}: {exc}") from exc
        return value
