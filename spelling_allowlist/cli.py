"""Command-line interface for the documentation spelling allow-list."""

import json
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spelling_allowlist import __version__, configure_logging
from spelling_allowlist.allow_list import AllowList
from spelling_allowlist.config import Settings, get_settings, load_configured_allow_list
from spelling_allowlist.errors import AllowListError
from spelling_allowlist.loader import AllowListLoader

console = Console()


def configure_verbose_logging() -> None:
    """Configure verbose debug logging."""
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    console.print("[dim]Debug logging enabled[/dim]")


def configure_quiet_logging(level: str) -> None:
    """Configure quiet logging - only messages at the configured level and above reach stderr."""
    configure_logging(level=level)


def configure_cli_logging(verbose: bool) -> None:
    if verbose:
        configure_verbose_logging()
    else:
        configure_quiet_logging(load_settings_or_abort().log_level)


def load_settings_or_abort() -> Settings:
    """Load settings from the environment or abort with a helpful message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid configuration")
        console.print("\nCheck the SPELLING_ALLOWLIST_* variables in your environment or .env file.")
        console.print(f"Details: {escape(str(e))}")
        raise click.Abort from e


def load_allow_list_or_abort(file: Path | None, no_defaults: bool) -> AllowList:
    """Build the effective allow-list from CLI options and settings.

    A ``--file`` given on the command line wins over the configured file, and
    ``--no-defaults`` wins over ``include_defaults``.
    """
    settings = load_settings_or_abort()
    overrides = {}
    if file is not None:
        overrides["file"] = str(file)
    if no_defaults:
        overrides["include_defaults"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        return load_configured_allow_list(settings)
    except (FileNotFoundError, AllowListError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load allow-list: {escape(str(e))}")
        raise click.Abort from e


file_option = click.option(
    "--file",
    "-f",
    "file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Extra allow-list file (.json, .yaml or .txt)",
)
no_defaults_option = click.option(
    "--no-defaults",
    is_flag=True,
    help="Do not include the built-in documentation allow-list",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)


@click.group()
@click.version_option(__version__, prog_name="spelling-allowlist")
def cli() -> None:
    """Spelling exception words and patterns for the documentation site."""


@cli.command()
@click.argument("tokens", nargs=-1, required=True)
@file_option
@no_defaults_option
@verbose_option
@click.pass_context
def check(
    ctx: click.Context,
    tokens: tuple[str, ...],
    file: Path | None,
    no_defaults: bool,
    verbose: bool,
) -> None:
    """Report whether each TOKEN is accepted by the allow-list.

    Exits with status 1 if any token is not allowed.
    """
    configure_cli_logging(verbose)
    allow_list = load_allow_list_or_abort(file, no_defaults)

    rejected = 0
    for token in tokens:
        if allow_list.is_allowed(token):
            console.print(f"[green]✓ allowed:[/green] {escape(token)}", highlight=False)
        else:
            console.print(f"[red]✗ not allowed:[/red] {escape(token)}", highlight=False)
            rejected += 1

    if rejected:
        logger.info(f"{rejected} of {len(tokens)} tokens not allowed")
        ctx.exit(1)


@cli.command()
@click.argument(
    "allow_list_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)
@verbose_option
def validate(allow_list_file: Path, verbose: bool) -> None:
    """Load ALLOW_LIST_FILE and report whether every entry is valid."""
    configure_cli_logging(verbose)

    try:
        allow_list = AllowListLoader().load_from_file(str(allow_list_file))
    except AllowListError as e:
        console.print(f"[bold red]Invalid allow-list:[/bold red] {escape(str(e))}")
        raise click.Abort from e

    console.print(f"[bold green]✓ Valid allow-list:[/bold green] {allow_list_file}")
    console.print(f"Patterns: [cyan]{len(allow_list.patterns)}[/cyan]")
    console.print(f"Words: [cyan]{len(allow_list.words)}[/cyan]")


@cli.command()
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (.json, .yaml or .txt); JSON to stdout if omitted",
)
@file_option
@no_defaults_option
@verbose_option
def export(output_file: Path | None, file: Path | None, no_defaults: bool, verbose: bool) -> None:
    """Write the effective allow-list to a file or stdout."""
    configure_cli_logging(verbose)
    allow_list = load_allow_list_or_abort(file, no_defaults)

    if output_file is None:
        click.echo(json.dumps(allow_list.to_dict(), indent=2, ensure_ascii=False))
        return

    try:
        AllowListLoader().dump(allow_list, str(output_file))
    except (OSError, AllowListError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to write {output_file}: {escape(str(e))}")
        logger.exception("Allow-list export failed")
        raise click.Abort from e

    console.print(f"[bold green]✓ Exported {len(allow_list)} entries[/bold green] to [cyan]{output_file}[/cyan]")


@cli.command()
@file_option
@no_defaults_option
@verbose_option
def show(file: Path | None, no_defaults: bool, verbose: bool) -> None:
    """Print the patterns and words in the effective allow-list."""
    configure_cli_logging(verbose)
    allow_list = load_allow_list_or_abort(file, no_defaults)

    table = Table(title="Patterns")
    table.add_column("#", justify="right")
    table.add_column("Source", style="cyan")
    for index, source in enumerate(allow_list.patterns):
        table.add_row(str(index), escape(source))
    console.print(table)

    console.print(f"\n[bold]Words ({len(allow_list.words)}):[/bold]")
    console.print(", ".join(allow_list.words), markup=False, highlight=False)


if __name__ == "__main__":
    cli()
