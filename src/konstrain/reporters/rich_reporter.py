# src/konstrain/reporters/rich_reporter.py
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.report import EXPORT_COLUMNS, ValidationReport

console = Console()

CONSTRAINT_COLUMNS = list(EXPORT_COLUMNS)
MAX_VALUE_RANGE_WIDTH = 60
NOT_APPLICABLE = "-"


def _cell(value: Any) -> str:
    if value is None:
        return NOT_APPLICABLE
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _truncate(text: Optional[str], width: int = MAX_VALUE_RANGE_WIDTH) -> str:
    if text is None:
        return NOT_APPLICABLE
    return text if len(text) <= width else text[: width - 1] + "…"


def build_table(title: str, headers: Sequence[str], rows: List[List[str]]) -> Table:
    """Generic bordered table: one header row, aligned data rows."""
    table = Table(title=title, box=box.SQUARE, show_lines=True, header_style="bold")
    for i, header in enumerate(headers):
        table.add_column(header, no_wrap=i == 0, overflow="fold")
    for row in rows:
        table.add_row(*row)
    return table


def constraint_set_table(constraint_set: ConstraintSet) -> Table:
    rows = [
        [
            c.name,
            str(c.declared_type),
            _cell(c.nullable),
            _cell(c.unique),
            _cell(c.min_length),
            _cell(c.max_length),
            _cell(c.min_value),
            _cell(c.max_value),
            _truncate(c.allowed_values_text),
        ]
        for c in constraint_set
    ]
    return build_table(f"Constraints: {constraint_set.name}", CONSTRAINT_COLUMNS, rows)


def _count_cell(value: Any) -> str:
    if value is None:
        return f"[dim]{NOT_APPLICABLE}[/dim]"
    if value is False or (not isinstance(value, bool) and value > 0):
        return f"[bold red]{_cell(value)}[/bold red]"
    return f"[green]{_cell(value)}[/green]"


def report_table(report: ValidationReport) -> Table:
    rows = [
        [row["Name"]] + [_count_cell(row[h]) for h in CONSTRAINT_COLUMNS[1:]]
        for row in report.to_rows()
    ]
    return build_table(f"Validation: {report.constraint_set_name}", CONSTRAINT_COLUMNS, rows)


def render_constraint_set(constraint_set: ConstraintSet, out: Optional[Console] = None) -> None:
    (out or console).print(constraint_set_table(constraint_set))


def render_report(report: ValidationReport, out: Optional[Console] = None) -> None:
    target = out or console
    target.print(report_table(report))
    for name in report.missing_columns:
        target.print(f"[yellow]⚠ column '{name}' not found in data[/yellow]")
    if report.passed:
        report_success(f"{report.constraint_set_name}: all checks passed", target)
    else:
        report_failure(
            f"{report.constraint_set_name}: {report.violation_count} violations "
            f"in {len(report.failed)} columns",
            target,
        )


def report_success(msg: str, out: Optional[Console] = None) -> None:
    (out or console).print(f"[bold green]✅ {msg}[/bold green]")


def report_failure(msg: str, out: Optional[Console] = None) -> None:
    (out or console).print(f"[bold red]❌ {msg}[/bold red]")
