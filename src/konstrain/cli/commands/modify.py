"""Modify command for Konstrain CLI."""

from __future__ import annotations

import warnings
from typing import List, Optional, Tuple

import typer

from konstrain.cli.constants import EXIT_SUCCESS
from konstrain.errors import ConstraintEditWarning, ParseError


def parse_edit(text: str) -> Tuple[str, str, str]:
    """
    Split a ``COLUMN.FIELD=VALUE`` edit.

    The value is everything after the first ``=``; the field is the part of
    the target after its last ``.``, so column names may contain dots.
    """
    target, sep, value = text.partition("=")
    column, dot, field = target.rpartition(".")
    if not sep or not dot or not column or not field:
        raise ParseError(f"invalid edit '{text}' (expected COLUMN.FIELD=VALUE)")
    return column, field.strip(), value


def register(app: typer.Typer) -> None:
    """Register the modify command with the app."""

    @app.command("modify")
    def modify(
        constraints: str = typer.Argument(..., help="Constraint set file to edit."),
        edits: List[str] = typer.Option(
            ...,
            "--set",
            help="COLUMN.FIELD=VALUE edit; repeat for several edits.",
        ),
        output: Optional[str] = typer.Option(
            None,
            "--output",
            "-o",
            help="Write the edited set here instead of overwriting the input.",
        ),
        show: bool = typer.Option(
            False, "--show", help="Print the constraint set after editing."
        ),
        config_path: Optional[str] = typer.Option(
            None, "--config", help="Path to a config.yml (default: .konstrain/config.yml)."
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Enable verbose errors."
        ),
    ) -> None:
        """
        Edit fields of a saved constraint set.

        Editable fields: data_type, nullable, unique, min_length, max_length,
        min_value, max_value, allowed_values. Rejected edits are reported and
        skipped; the remaining edits are still applied.

        Examples:
            konstrain modify contracts/users.json --set age.nullable=true
            konstrain modify contracts/users.json --set "status.allowed_values=active, banned"
        """
        from konstrain.cli.main import exit_with_error, setup

        config = setup(config_path, verbose)

        try:
            from konstrain.constraints.constraint_set import ConstraintSet
            from konstrain.reporters.rich_reporter import render_constraint_set

            constraint_set = ConstraintSet.load(constraints, default_format=config.constraint_format)

            parsed = [parse_edit(e) for e in edits]

            applied = 0
            for column, field, value in parsed:
                with warnings.catch_warnings(record=True) as caught:
                    warnings.simplefilter("always", ConstraintEditWarning)
                    ok = constraint_set.modify(column, field, value)
                if ok:
                    applied += 1
                    typer.secho(f"Updated {column}.{field} = {value}", fg=typer.colors.GREEN)
                for w in caught:
                    typer.secho(f"Skipped: {w.message}", fg=typer.colors.YELLOW)

            if applied:
                target = output or constraints
                constraint_set.save(target, default_format=config.constraint_format)
                typer.secho(
                    f"{applied}/{len(edits)} edits saved to {target}", fg=typer.colors.GREEN
                )
            else:
                typer.secho("No edits applied; file left unchanged.", fg=typer.colors.YELLOW)

            if show:
                render_constraint_set(constraint_set)

        except typer.Exit:
            raise
        except Exception as e:
            exit_with_error(e, verbose)

        raise typer.Exit(code=EXIT_SUCCESS)
