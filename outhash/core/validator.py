"""Post-emission check that shipped file names embed their content hash.

Each emitted asset whose name matches the filter is read back from disk,
rehashed with the run's ``HashConfig`` and its short digest looked up in the
file name. Mismatches are collected across the whole set and reported once.
The validator never renames or mutates anything.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from outhash.core.assets import Asset
from outhash.core.hasher import ContentHasher
from outhash.models.reports import ValidationMismatch, ValidationReport

logger = logging.getLogger(__name__)


class ValidationMismatchError(RuntimeError):
    """Raised when at least one emitted file name has a stale hash."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        lines = [m.describe() for m in report.mismatches]
        super().__init__(
            f"{len(report.mismatches)} emitted file(s) failed hash validation:\n"
            + "\n".join(f"  - {line}" for line in lines)
        )


class OutputValidator:
    """Verifies emitted assets against their content hash.

    Parameters
    ----------
    hasher:
        The same hasher the renamer used for this run.
    pattern:
        Regular expression searched in each asset name; only matching
        assets are checked.
    """

    def __init__(self, hasher: ContentHasher, pattern: str | re.Pattern[str] = r"^.*$") -> None:
        self.hasher = hasher
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(self, assets: Iterable[Asset]) -> ValidationReport:
        """Check every matching asset and return the report without raising."""
        checked: list[str] = []
        mismatches: list[ValidationMismatch] = []

        for asset in assets:
            if not self.pattern.search(asset.name):
                continue
            if asset.emitted_path is None:
                raise FileNotFoundError(f"Asset {asset.name} was never emitted")

            data = asset.emitted_path.read_bytes()
            short_digest = self.hasher.short_digest(data)
            checked.append(asset.name)

            if short_digest not in asset.name:
                logger.error(
                    "Hash mismatch: %s (content hash %s)", asset.name, short_digest
                )
                mismatches.append(
                    ValidationMismatch(
                        asset_name=asset.name,
                        computed_digest=short_digest,
                        path=asset.emitted_path,
                    )
                )

        report = ValidationReport(checked=checked, mismatches=mismatches)
        logger.info("Output validation: %s", report.summary)
        return report

    def validate(self, assets: Iterable[Asset]) -> ValidationReport:
        """Check assets and raise ``ValidationMismatchError`` on any mismatch."""
        report = self.check(assets)
        if not report.passed:
            raise ValidationMismatchError(report)
        return report
