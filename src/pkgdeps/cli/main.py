"""pkgdeps CLI: Resolve and check package dependencies.

Entry point for the ``pkgdeps`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    check: Resolve the project's package dependencies and report which
            are installed in the target org.

Usage::

    pkgdeps check -u MyScratchOrg -v MyDevHub
    pkgdeps check -u MyScratchOrg -v MyDevHub -b "DEV" -p core,sales
    pkgdeps --log-level debug check -u MyScratchOrg -v MyDevHub --format json
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from pkgdeps import __version__
from pkgdeps.cli.check import check_command
from pkgdeps.config import ENV_LOG_LEVEL

_LOG_LEVELS = ["debug", "info", "warning", "error"]


def configure_logging(level: str) -> None:
    """Route pkgdeps log records to stderr through a Rich handler."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=level == "debug",
    )
    root = logging.getLogger("pkgdeps")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="error",
    envvar=ENV_LOG_LEVEL,
    show_default=True,
    help="Verbosity of diagnostic logging on stderr.",
)
def cli(log_level: str) -> None:
    """pkgdeps: Resolve and check package dependencies.

    Reads the package directories of an sfdx-project.json project, resolves
    every declared dependency to a concrete package version using the
    DevHub, and reports which of them are installed in a target org.
    """
    configure_logging(log_level.lower())


# Register all subcommands
cli.add_command(check_command)
