"""Main Typer application — imports and registers all CLI commands.

Entry point: ``outhash`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from outhash.cli.commands.digest import digest_cmd
from outhash.cli.commands.rehash import rehash_cmd
from outhash.cli.commands.verify import verify_cmd
from outhash.config import config

app = typer.Typer(
    name="outhash",
    help="outhash: recompute content hashes of finalized build outputs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="rehash", help="Rehash chunk files and update index chunks.")(rehash_cmd)
app.command(name="verify", help="Verify emitted file names against their content.")(verify_cmd)
app.command(name="digest", help="Print the content digest of files.")(digest_cmd)


@app.callback()
def _configure_logging(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (defaults to OUTHASH_LOG_LEVEL)."
    ),
) -> None:
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
