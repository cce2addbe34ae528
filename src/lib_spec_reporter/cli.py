"""Click command line interface for replaying test-runner event streams.

Contents
--------
* :func:`cli` - root group with traceback, dotenv and verbosity switches.
* :func:`cli_info` - metadata banner.
* :func:`cli_report` - render an NDJSON event stream to stdout.
* :func:`main` - entry point run through :mod:`lib_cli_exit_tools`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as dotenv_config
from .adapters.palette import PALETTE_THEMES
from .runtime import ReporterConfig, report_lines

logger = logging.getLogger(__name__)

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def summary_info() -> str:
    """Return the metadata banner printed by ``info``.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message="%(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from a nearby .env (default: ${dotenv_config.DOTENV_ENV_VAR}).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log decoder and formatter diagnostics to stderr.")
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None, verbose: bool) -> None:
    """Root command storing global switches."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if dotenv_config.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(dotenv_config.DOTENV_ENV_VAR)):
        dotenv_config.enable_dotenv()

    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=_LOG_FORMAT)

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("report", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--color/--no-color", default=None, help="Force colour on or off (default: detect).")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory file paths are shown relative to (default: $SPEC_REPORTER_BASE_DIR or cwd).",
)
@click.option(
    "--theme",
    type=click.Choice(sorted(PALETTE_THEMES), case_sensitive=False),
    default=None,
    help="Colour theme (default: $SPEC_REPORTER_THEME or classic).",
)
def cli_report(source: TextIO, color: bool | None, base_dir: Path | None, theme: str | None) -> None:
    """Render newline-delimited JSON test events from SOURCE (default: stdin)."""

    overrides: dict[str, object] = {"base_dir": base_dir, "theme": theme}
    if color is True:
        overrides.update(force_color=True, no_color=False)
    elif color is False:
        overrides["no_color"] = True

    config = ReporterConfig.from_env(**overrides)
    result = report_lines(source, config=config)
    logger.debug("report finished: %s", result)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli` and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    so embedding hosts and tests see their original configuration.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
