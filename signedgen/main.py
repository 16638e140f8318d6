"""
signedgen — CLI entrypoint.

Usage:
    python -m signedgen.main --help
    python -m signedgen.main verify path/to/generated.py
    python -m signedgen.main generate schemas/user.yml
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from signedgen import __version__
from signedgen.core.observability.logging_config import setup_logging


def _console_level(*, debug: bool, verbose: bool, quiet: bool) -> str:
    """Flags win over SIGNEDGEN_LOG_LEVEL; --debug wins over the other flags."""
    for flag, level in ((debug, "DEBUG"), (verbose, "INFO"), (quiet, "ERROR")):
        if flag:
            return level
    return os.environ.get("SIGNEDGEN_LOG_LEVEL", "WARNING")


@click.group()
@click.version_option(version=__version__, prog_name="signedgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to codegen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """signedgen — regenerate source files without losing manual edits."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=_console_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("SIGNEDGEN_LOG_FILE"),
        log_file_level=os.environ.get("SIGNEDGEN_LOG_FILE_LEVEL"),
    )


# ── Register sub-commands from signedgen/ui/cli/ ────────────────

from signedgen.ui.cli.codegen import generate, regions, verify

cli.add_command(verify)
cli.add_command(regions)
cli.add_command(generate)


if __name__ == "__main__":
    cli()
