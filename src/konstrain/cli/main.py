"""
Konstrain CLI: profile tables into constraint sets and validate data.

Thin layer: parse args → call profiler/validator → print via reporters.
"""

from __future__ import annotations

import traceback
from typing import NoReturn, Optional

import typer

from konstrain.cli.constants import EXIT_CONFIG_ERROR, EXIT_RUNTIME_ERROR
from konstrain.config.settings import KonstrainConfig, load_config
from konstrain.errors import (
    ConfigurationError,
    ParseError,
    format_error_for_cli,
)
from konstrain.logging import configure_logging
from konstrain.version import VERSION

app = typer.Typer(help="Konstrain CLI: schema contracts for tabular data")


@app.callback()
def _version(
    version: Optional[bool] = typer.Option(
        None, "--version", help="Show the Konstrain version and exit.", is_eager=True
    )
) -> None:
    if version:
        typer.echo(f"konstrain {VERSION}")
        raise typer.Exit(code=0)


def setup(config_path: Optional[str], verbose: bool) -> KonstrainConfig:
    """Resolve settings and configure logging for a command."""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        typer.secho(f"Config error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    configure_logging("DEBUG" if verbose else config.log_level)
    return config


def exit_with_error(exc: Exception, verbose: bool) -> NoReturn:
    """Print an error and exit with the matching exit code."""
    msg = format_error_for_cli(exc)
    # I/O failures and anything unexpected are runtime errors
    code = EXIT_CONFIG_ERROR if isinstance(exc, (ConfigurationError, ParseError)) else EXIT_RUNTIME_ERROR

    if verbose:
        typer.secho(f"Error: {msg}\n\n{traceback.format_exc()}", fg=typer.colors.RED)
    else:
        typer.secho(f"Error: {msg}", fg=typer.colors.RED)
        if code == EXIT_RUNTIME_ERROR:
            typer.secho("Use --verbose for full traceback.", fg=typer.colors.YELLOW)
    raise typer.Exit(code=code)


def _register_commands() -> None:
    from konstrain.cli.commands import modify, profile, show, validate

    profile.register(app)
    validate.register(app)
    modify.register(app)
    show.register(app)


_register_commands()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
