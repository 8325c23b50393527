"""``outhash digest FILE...`` — print the short content digest of files."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from outhash.cli.commands.rehash import resolve_settings
from outhash.core.hasher import ConfigurationError, ContentHasher
from outhash.models.config import HashConfig

console = Console()


def digest_cmd(
    files: list[Path] = typer.Argument(..., help="Files to hash."),
    full: bool = typer.Option(False, "--full", help="Print the untruncated digest."),
    hash_function: str = typer.Option(None, "--hash-function", help="Digest algorithm."),
    hash_digest: str = typer.Option(None, "--hash-digest", help="Digest encoding."),
    hash_length: int = typer.Option(None, "--hash-length", help="Digest length in characters."),
    salt: str = typer.Option(None, "--salt", help="Extra bytes mixed into every digest."),
) -> None:
    """Print each file's digest as ``<digest>  <path>``."""
    settings = resolve_settings(
        hash_function=hash_function,
        hash_digest=hash_digest,
        hash_digest_length=hash_length,
        hash_salt=salt,
    )
    try:
        hasher = ContentHasher(HashConfig.from_output_options(settings.output_options()))
    except ConfigurationError as exc:
        console.print(f"[bold red]Invalid hash settings:[/bold red] {exc}")
        raise typer.Exit(code=1)

    for path in files:
        if not path.is_file():
            console.print(f"[bold red]Not a file:[/bold red] {path}")
            raise typer.Exit(code=1)
        result = hasher.hash(path.read_bytes())
        digest = result.full_digest if full else result.short_digest
        console.print(f"{digest}  {path}", highlight=False)
