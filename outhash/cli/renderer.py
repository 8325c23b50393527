"""Rich terminal rendering for rehash results and validation reports.

Color scheme
------------
- green  : renamed / hash matches
- dim    : unchanged (hash was already correct)
- cyan   : index chunk
- red    : stale hash
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from outhash.models.artifacts import RehashResult
from outhash.models.reports import ValidationReport


class ReportRenderer:
    """Renders ``RehashResult`` and ``ValidationReport`` objects.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rehash(self, result: RehashResult) -> Table:
        table = Table(title="Rehashed chunks", show_lines=False)
        table.add_column("Chunk", style="bold")
        table.add_column("Old file")
        table.add_column("New file")
        table.add_column("Role", justify="center")

        for record in result.records:
            role = "[cyan]index[/cyan]" if record.is_index else "chunk"
            new_file = (
                f"[green]{record.new_name}[/green]"
                if record.renamed
                else f"[dim]{record.new_name} (unchanged)[/dim]"
            )
            table.add_row(record.chunk_name, record.old_name, new_file, role)
        return table

    def render_validation(self, report: ValidationReport) -> Panel:
        table = Table(show_header=True, box=None)
        table.add_column("File")
        table.add_column("Content hash")
        table.add_column("Status", justify="center")

        stale = {m.asset_name: m for m in report.mismatches}
        for name in report.checked:
            mismatch = stale.get(name)
            if mismatch is None:
                table.add_row(name, "", "[green]OK[/green]")
            else:
                table.add_row(name, mismatch.computed_digest, "[bold red]STALE[/bold red]")

        style = "green" if report.passed else "red"
        return Panel(
            table,
            title=f"[bold]Output validation[/bold] - {report.summary}",
            border_style=style,
        )

    def print_rehash(self, result: RehashResult) -> None:
        self.console.print(self.render_rehash(result))
        self.console.print(
            f"[bold]{result.renamed_count}[/bold] of {len(result.records)} chunk files renamed"
        )
        if result.rewritten:
            self.console.print(
                f"References rewritten in [cyan]{', '.join(result.rewritten)}[/cyan]"
            )

    def print_validation(self, report: ValidationReport) -> None:
        self.console.print(self.render_validation(report))
