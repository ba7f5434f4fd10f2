"""cjs-loader CLI - resolve and require CommonJS modules from a directory tree."""

import logging
import sys
from pathlib import Path

import click
from rich.pretty import Pretty
from rich.table import Table

from .console import console
from .console import error_console
from .errors import LoaderError
from .loader import Loader
from .logging_setup import init_json_logging
from .module_resolution import FileSystemHost
from .module_resolution import PythonEvaluator
from .settings import LoaderSettings
from .settings import load_settings
from .settings import parse_override_options
from .utils.error_format import error_hint
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)


def _build_settings(settings_file: str | None, overrides: tuple[str, ...], override_base: str | None) -> LoaderSettings:
    try:
        settings = load_settings(settings_file)
        parsed = parse_override_options(overrides)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if parsed:
        parsed = {**settings.builtin_overrides, **parsed}
    return settings.with_overrides(builtin_overrides=parsed or None, override_base_directory=override_base)


def _build_loader(root: str, settings: LoaderSettings) -> Loader:
    host = FileSystemHost(root)
    logger.debug(f"Loading modules from {host.root}")
    return Loader(host.exists_file, host.read_file, PythonEvaluator(), settings=settings)


def _report_error(e: Exception) -> None:
    error_console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e))}")
    if hint := error_hint(e):
        error_console.print(f"[dim]{escape_markup(hint)}[/dim]")


@click.group()
@click.option("--settings", "settings_file", type=click.Path(dir_okay=False), help="YAML settings file")
@click.option("--override", "overrides", multiple=True, help="Builtin override NAME=PATH (repeatable)")
@click.option("--override-base", help="Base directory for relative override paths")
@click.option("--log-file", help="JSONL log file (default: $CJS_LOADER_LOG_PATH)")
@click.option("--log-level", help="Log level (default: $CJS_LOADER_LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx: click.Context, settings_file, overrides, override_base, log_file, log_level):
    """Resolve and load CommonJS-style modules."""
    if log_file or log_level:
        init_json_logging(log_file, log_level)
    ctx.obj = _build_settings(settings_file, overrides, override_base)


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("specifier")
@click.option("--from", "from_path", help="Canonical path of the requesting module (default: /)")
@click.pass_obj
def resolve(settings: LoaderSettings, root: str, specifier: str, from_path: str | None):
    """Print the canonical path SPECIFIER resolves to under ROOT."""
    loader = _build_loader(root, settings)
    try:
        path = loader.resolve(specifier, from_path)
    except LoaderError as e:
        _report_error(e)
        sys.exit(1)
    console.print(f"[cyan]{escape_markup(path)}[/cyan]")


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("specifier")
@click.pass_obj
def require(settings: LoaderSettings, root: str, specifier: str):
    """Load SPECIFIER under ROOT and print its exports."""
    loader = _build_loader(root, settings)
    try:
        exports = loader.require(specifier)
    except Exception as e:
        _report_error(e)
        sys.exit(1)

    console.print(Pretty(exports))
    console.print(f"[dim]{len(loader.modules)} module(s) loaded from {escape_markup(Path(root).resolve())}[/dim]")


@cli.command()
@click.pass_obj
def config(settings: LoaderSettings):
    """Show the effective loader settings."""
    table = Table(title="Loader Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in settings.model_dump().items():
        table.add_row(name, escape_markup(value))
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
