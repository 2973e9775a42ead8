"""Show command for Konstrain CLI."""

from __future__ import annotations

from typing import Literal, Optional

import typer

from konstrain.cli.constants import EXIT_SUCCESS


def register(app: typer.Typer) -> None:
    """Register the show command with the app."""

    @app.command("show")
    def show(
        constraints: str = typer.Argument(..., help="Constraint set file to display."),
        output_format: Literal["rich", "json", "yaml"] = typer.Option(
            "rich", "--output-format", "-o", help="Output format."
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Enable verbose errors."
        ),
    ) -> None:
        """Print a saved constraint set."""
        from konstrain.cli.main import exit_with_error, setup

        config = setup(None, verbose)

        try:
            from konstrain.constraints.constraint_set import ConstraintSet
            from konstrain.reporters.rich_reporter import render_constraint_set

            constraint_set = ConstraintSet.load(constraints, default_format=config.constraint_format)
            if output_format == "json":
                typer.echo(constraint_set.to_json())
            elif output_format == "yaml":
                typer.echo(constraint_set.to_yaml())
            else:
                render_constraint_set(constraint_set)

        except typer.Exit:
            raise
        except Exception as e:
            exit_with_error(e, verbose)

        raise typer.Exit(code=EXIT_SUCCESS)
