"""CLI entry point for promptline."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from promptline import __version__
from promptline.config import ConfigError, PromptConfig
from promptline.constants import DEBUG_ENABLED
from promptline.debug_log import export_logs_to_file, format_log_entries, setup_debug_logging
from promptline.line import render_prompt
from promptline.paths import get_config_path, get_debug_log_path
from promptline.prettify import InvalidPathError, prettify_path
from promptline.terminal import detect_color_system, get_terminal_name, supports_truecolor

log = logging.getLogger(__name__)


def _load_config_or_fail() -> PromptConfig:
    try:
        return PromptConfig.load(get_config_path())
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _working_directory() -> Path:
    """Current directory, or $PWD when it has been removed from under the shell."""
    try:
        return Path.cwd()
    except OSError as exc:
        log.warning("Cannot determine working directory: %s", exc)
        return Path(os.environ.get("PWD", os.sep))


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Render a one-line shell status prompt.

    \b
    Usage in bash:
        PS1='$(promptline)'
    """
    if version:
        click.echo(f"promptline {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        ctx.invoke(render)


@cli.command()
@click.option("--width", type=click.IntRange(min=0), default=None, help="Path width budget")
@click.option("--no-git", is_flag=True, help="Skip branch and work tree lookups")
@click.option("--debug", is_flag=True, help="Print captured debug logs to stderr")
@click.option("--export-log", is_flag=True, help="Write captured debug logs to the data dir")
def render(width: int | None, no_git: bool, debug: bool, export_log: bool) -> None:
    """Print the prompt for the current directory (default command)."""
    setup_debug_logging()

    try:
        config = PromptConfig.load(get_config_path())
    except ConfigError as exc:
        log.error("%s; using defaults", exc)
        config = PromptConfig()

    if width is not None:
        config.general.path_width = width
    if no_git:
        config.general.show_git = False

    prompt = render_prompt(_working_directory(), config, truecolor=supports_truecolor())
    click.echo(prompt, nl=False)

    if debug or DEBUG_ENABLED:
        for line in format_log_entries():
            click.echo(line, err=True)
    if export_log:
        log_path = get_debug_log_path()
        count = export_logs_to_file(log_path)
        click.echo(f"Wrote {count} log entries to {log_path}", err=True)


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=str))
@click.option("--width", type=click.IntRange(min=0), default=None, help="Path width budget")
@click.option("--no-home", is_flag=True, help="Do not abbreviate the home directory")
def path(paths: tuple[str, ...], width: int | None, no_home: bool) -> None:
    """Print each PATH shortened to the width budget.

    \b
    Examples:
        promptline path
        promptline path --width 20 /usr/local/share/applications
    """
    config = _load_config_or_fail()
    budget = config.general.path_width if width is None else width
    home = None if no_home else os.environ.get("HOME")

    for raw in paths or (os.curdir,):
        try:
            click.echo(
                prettify_path(
                    raw,
                    budget,
                    home,
                    truncator=config.glyphs.truncator,
                    home_marker=config.glyphs.home_marker,
                )
            )
        except InvalidPathError as exc:
            raise click.ClickException(str(exc)) from exc


@cli.group()
def config() -> None:
    """Inspect or create the configuration file."""
    pass


@config.command("path")
def config_path() -> None:
    """Print the location of the config file."""
    click.echo(str(get_config_path()))


@config.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    loaded = _load_config_or_fail()
    config_file = get_config_path()

    table = Table(title="promptline configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for section_name, section in loaded.model_dump().items():
        for key, value in section.items():
            table.add_row(f"{section_name}.{key}", repr(value))

    table.add_section()
    source = "found" if config_file.exists() else "not found, using defaults"
    table.add_row("config file", f"{config_file} ({source})")
    table.add_row("terminal", get_terminal_name())
    table.add_row("color system", detect_color_system().value)

    Console().print(table)


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def config_init(force: bool) -> None:
    """Write a config file with the default settings."""
    config_file = get_config_path()
    if config_file.exists() and not force:
        raise click.ClickException(f"{config_file} already exists (use --force to overwrite)")

    PromptConfig().save(config_file)
    click.secho(f"Wrote {config_file}", fg="green")


if __name__ == "__main__":
    cli()
