"""``outhash verify BUILD_DIR`` — check emitted file names against content."""

from __future__ import annotations

import re
from pathlib import Path

import typer
from rich.console import Console

from outhash.cli.commands.rehash import resolve_settings
from outhash.cli.renderer import ReportRenderer
from outhash.core.hasher import ConfigurationError, ContentHasher
from outhash.core.loader import load_build_dir
from outhash.core.validator import OutputValidator
from outhash.models.config import HashConfig

console = Console()


def verify_cmd(
    build_dir: Path = typer.Argument(
        ...,
        help="Directory holding the emitted build output.",
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        help="Only check files whose name matches this regular expression.",
    ),
    hash_function: str = typer.Option(None, "--hash-function", help="Digest algorithm."),
    hash_digest: str = typer.Option(None, "--hash-digest", help="Digest encoding."),
    hash_length: int = typer.Option(None, "--hash-length", help="Digest length in characters."),
    salt: str = typer.Option(None, "--salt", help="Extra bytes mixed into every digest."),
) -> None:
    """Verify that every emitted file name embeds the hash of its content.

    Exits with code 1 when at least one file has a stale hash.
    """
    settings = resolve_settings(
        validate_output_pattern=pattern,
        hash_function=hash_function,
        hash_digest=hash_digest,
        hash_digest_length=hash_length,
        hash_salt=salt,
    )

    try:
        hasher = ContentHasher(HashConfig.from_output_options(settings.output_options()))
        validator = OutputValidator(hasher, settings.validate_output_pattern)
        _chunks, assets = load_build_dir(build_dir, settings.filename_pattern)
    except (ConfigurationError, FileNotFoundError, ValueError, re.error) as exc:
        console.print(f"[bold red]Cannot verify build:[/bold red] {exc}")
        raise typer.Exit(code=1)

    report = validator.check(assets.values())
    ReportRenderer(console=console).print_validation(report)

    if not report.passed:
        raise typer.Exit(code=1)
