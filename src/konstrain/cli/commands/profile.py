"""Profile command for Konstrain CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from konstrain.cli.constants import EXIT_SUCCESS


def register(app: typer.Typer) -> None:
    """Register the profile command with the app."""

    @app.command("profile")
    def profile(
        source: str = typer.Argument(
            ..., help="Path to the dataset (.csv, .tsv, .parquet, .json, .ndjson)"
        ),
        print_constraints: bool = typer.Option(
            False,
            "--print-constraints",
            "-p",
            help="Print the inferred constraints as a table.",
        ),
        save_constraints: Optional[str] = typer.Option(
            None,
            "--save-constraints",
            "-s",
            help="Write the inferred constraint set to this path (.json, .yml).",
        ),
        name: Optional[str] = typer.Option(
            None, "--name", "-n", help="Constraint set name (default: dataset file stem)."
        ),
        workers: Optional[int] = typer.Option(
            None, "--workers", "-w", min=1, help="Profile columns on a thread pool."
        ),
        config_path: Optional[str] = typer.Option(
            None, "--config", help="Path to a config.yml (default: .konstrain/config.yml)."
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Enable verbose output."
        ),
    ) -> None:
        """
        Infer a constraint set from a dataset.

        Examples:
            konstrain profile data/users.csv -p
            konstrain profile data/users.parquet -s contracts/users.json
        """
        from konstrain.cli.main import exit_with_error, setup

        config = setup(config_path, verbose)

        try:
            from konstrain.connectors.reader import read_table
            from konstrain.constraints.constraint_set import ConstraintSet
            from konstrain.reporters.rich_reporter import render_constraint_set

            df = read_table(source, try_parse_dates=config.csv_try_parse_dates)
            constraint_set = ConstraintSet.from_table(
                df,
                name=name or Path(source).stem,
                workers=workers or config.workers,
            )

            if save_constraints:
                constraint_set.save(save_constraints, default_format=config.constraint_format)
                typer.secho(
                    f"Constraints saved to {save_constraints}", fg=typer.colors.GREEN
                )

            if print_constraints or not save_constraints:
                render_constraint_set(constraint_set)

        except typer.Exit:
            raise
        except Exception as e:
            exit_with_error(e, verbose)

        raise typer.Exit(code=EXIT_SUCCESS)
