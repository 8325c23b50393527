"""Runtime configuration — env-driven via pydantic-settings.

Reads OUTHASH_* environment variables and an optional .env file. List
settings take JSON, e.g. ``OUTHASH_INDEX_ARTIFACT_NAMES='["vendor"]'``.

Examples
--------
Override via environment::

    export OUTHASH_LOG_LEVEL=DEBUG
    export OUTHASH_HASH_FUNCTION=sha256
    export OUTHASH_HASH_DIGEST_LENGTH=8
    export OUTHASH_VALIDATE_OUTPUT=true
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from outhash.core.loader import DEFAULT_FILENAME_PATTERN
from outhash.models.config import OutputOptions, PluginOptions


class OutHashSettings(BaseSettings):
    """Settings shared by the CLI and library callers."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OUTHASH_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Plugin options
    index_artifact_names: list[str] = []
    validate_output: bool = False
    validate_output_pattern: str = r"^.*$"

    # Host output hashing
    hash_function: str = "md5"
    hash_digest: str = "hex"
    hash_digest_length: int = Field(default=20, gt=0)
    hash_salt: str | None = None

    # Build directory loading
    filename_pattern: str = DEFAULT_FILENAME_PATTERN

    def plugin_options(self) -> PluginOptions:
        return PluginOptions(
            index_artifact_names=frozenset(self.index_artifact_names),
            validate_output=self.validate_output,
            validate_output_pattern=self.validate_output_pattern,
        )

    def output_options(self, path: Path | None = None) -> OutputOptions:
        return OutputOptions(
            path=path,
            hash_function=self.hash_function,
            hash_digest=self.hash_digest,
            hash_digest_length=self.hash_digest_length,
            hash_salt=self.hash_salt,
        )


# Module-level singleton — import as `from outhash.config import config`
config = OutHashSettings()
