"""Output validation report models."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ValidationMismatch(BaseModel):
    """An emitted file whose name does not embed the hash of its bytes."""

    model_config = ConfigDict(frozen=True)

    asset_name: str
    computed_digest: str
    path: Path | None = None

    def describe(self) -> str:
        return (
            f"The hash in {self.asset_name} does not match the hash "
            f"of the content ({self.computed_digest})"
        )


class ValidationReport(BaseModel):
    """Result of one validation pass over the emitted assets."""

    model_config = ConfigDict(frozen=True)

    checked: list[str] = []  # asset names that matched the filter
    mismatches: list[ValidationMismatch] = []
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def passed(self) -> bool:
        return not self.mismatches

    @property
    def summary(self) -> str:
        if self.passed:
            return f"All {len(self.checked)} emitted files match their content hash"
        return f"{len(self.mismatches)}/{len(self.checked)} emitted files have stale hashes"
