"""Validate command for Konstrain CLI."""

from __future__ import annotations

from typing import Literal, Optional

import typer

from konstrain.cli.constants import EXIT_SUCCESS, EXIT_VALIDATION_FAILED


def register(app: typer.Typer) -> None:
    """Register the validate command with the app."""

    @app.command("validate")
    def validate(
        source: str = typer.Argument(..., help="Path to the dataset to check."),
        validate_against: str = typer.Option(
            ...,
            "--validate-against",
            "-a",
            help="Constraint set file (.json, .yml) to validate against.",
        ),
        export_output: Optional[str] = typer.Option(
            None,
            "--export-output",
            "-e",
            help="Write the validation report to this CSV file.",
        ),
        output_format: Literal["rich", "json"] = typer.Option(
            "rich", "--output-format", "-o", help="Output format."
        ),
        quiet: bool = typer.Option(
            False, "--quiet", "-q", help="Do not print the report."
        ),
        workers: Optional[int] = typer.Option(
            None, "--workers", "-w", min=1, help="Validate columns on a thread pool."
        ),
        config_path: Optional[str] = typer.Option(
            None, "--config", help="Path to a config.yml (default: .konstrain/config.yml)."
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Enable verbose errors."
        ),
    ) -> None:
        """
        Check a dataset against a saved constraint set.

        Exits 0 when every check passes and 1 when violations were found.

        Examples:
            konstrain validate data/new_users.csv -a contracts/users.json
            konstrain validate data/new_users.csv -a contracts/users.json -e report.csv
        """
        from konstrain.cli.main import exit_with_error, setup

        config = setup(config_path, verbose)

        try:
            from konstrain.connectors.reader import read_table
            from konstrain.constraints.constraint_set import ConstraintSet
            from konstrain.engine.validator import Validator
            from konstrain.reporters.rich_reporter import render_report

            constraint_set = ConstraintSet.load(
                validate_against, default_format=config.constraint_format
            )
            df = read_table(source, try_parse_dates=config.csv_try_parse_dates)
            report = Validator(workers=workers or config.workers).validate(df, constraint_set)

            if export_output:
                report.export(
                    export_output,
                    extension=config.export_extension,
                    delimiter=config.export_delimiter,
                )

            if not quiet:
                if output_format == "json":
                    typer.echo(report.to_json(indent=2))
                else:
                    render_report(report)
                    if export_output:
                        typer.secho(f"Report exported to {export_output}", fg=typer.colors.GREEN)

        except typer.Exit:
            raise
        except Exception as e:
            exit_with_error(e, verbose)

        raise typer.Exit(code=EXIT_SUCCESS if report.passed else EXIT_VALIDATION_FAILED)
