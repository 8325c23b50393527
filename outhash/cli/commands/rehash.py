"""``outhash rehash BUILD_DIR`` — rehash an emitted build directory.

Loads every ``name.<hash>.ext`` file as a chunk, recomputes its hash from
the final bytes, rewrites references inside the index chunks and any
unhashed index assets (an HTML page) and writes the result. When rewriting
in place, files superseded by a rename are removed.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from outhash.cli.renderer import ReportRenderer
from outhash.config import OutHashSettings, config
from outhash.core.compilation import Compiler
from outhash.core.hooks import HookExecutionError
from outhash.core.loader import load_build_dir
from outhash.core.plugin import OutputHashPlugin
from outhash.core.repository import AssetRepository
from outhash.models.artifacts import RehashResult

console = Console()


def _remove_superseded(
    result: RehashResult | None,
    assets: AssetRepository,
    build_dir: Path,
    out_dir: Path | None,
) -> None:
    """Delete files left under a pre-rename name when rewriting in place."""
    if result is None:
        return
    if out_dir is not None and Path(out_dir).resolve() != Path(build_dir).resolve():
        return
    for old_name in result.file_renames():
        if old_name not in assets:
            (Path(build_dir) / old_name).unlink(missing_ok=True)


def resolve_settings(**overrides: object) -> OutHashSettings:
    """Return the global settings with every non-None CLI override applied."""
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return config
    try:
        return OutHashSettings(**{**config.model_dump(), **update})
    except ValidationError as exc:
        console.print(f"[bold red]Invalid settings:[/bold red] {exc}")
        raise typer.Exit(code=1)


def rehash_cmd(
    build_dir: Path = typer.Argument(
        ...,
        help="Directory holding the emitted build output.",
    ),
    index: list[str] = typer.Option(
        None,
        "--index",
        "-i",
        help=(
            "Index chunk name or unhashed asset name (repeatable), "
            "e.g. 'vendor' or 'index.html'."
        ),
    ),
    out_dir: Path = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the rehashed build here instead of rewriting BUILD_DIR in place.",
    ),
    validate: bool = typer.Option(
        None,
        "--validate/--no-validate",
        help="Verify emitted file names against their content afterwards.",
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        help="Only validate files whose name matches this regular expression.",
    ),
    hash_function: str = typer.Option(None, "--hash-function", help="Digest algorithm."),
    hash_digest: str = typer.Option(None, "--hash-digest", help="Digest encoding."),
    hash_length: int = typer.Option(None, "--hash-length", help="Digest length in characters."),
    salt: str = typer.Option(None, "--salt", help="Extra bytes mixed into every digest."),
) -> None:
    """Recompute chunk hashes and propagate the new names into index chunks."""
    settings = resolve_settings(
        index_artifact_names=list(index) if index else None,
        validate_output=validate,
        validate_output_pattern=pattern,
        hash_function=hash_function,
        hash_digest=hash_digest,
        hash_digest_length=hash_length,
        hash_salt=salt,
    )
    renderer = ReportRenderer(console=console)

    try:
        chunks, assets = load_build_dir(build_dir, settings.filename_pattern)
        plugin = OutputHashPlugin(settings.plugin_options())
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[bold red]Cannot load build:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if not chunks:
        console.print(f"[yellow]No hashed chunk files found in {build_dir}.[/yellow]")
        raise typer.Exit(code=0)

    target = out_dir or build_dir
    compiler = Compiler(settings.output_options(target))
    compiler.apply(plugin)

    try:
        compiler.run(chunks, assets)
    except HookExecutionError as exc:
        if plugin.result is not None:
            renderer.print_rehash(plugin.result)
        if plugin.validation is not None:
            # emission already happened
            _remove_superseded(plugin.result, assets, build_dir, out_dir)
            renderer.print_validation(plugin.validation)
        console.print(f"[bold red]Rehash failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if plugin.result is None:
        console.print("[bold red]Rehash failed:[/bold red] no result was produced")
        raise typer.Exit(code=1)

    _remove_superseded(plugin.result, assets, build_dir, out_dir)

    renderer.print_rehash(plugin.result)
    if plugin.validation is not None:
        renderer.print_validation(plugin.validation)
