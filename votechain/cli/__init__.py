"""
VOTECHAIN CLI — Package init.

Re-exports the main CLI group and shared utilities.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from votechain import __version__, config

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s — %(message)s",
        datefmt="%H:%M:%S",
    )


# ─── Main Group ──────────────────────────────────────────────────

@click.group()
@click.version_option(__version__, prog_name="votechain")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """VOTECHAIN — Hash-chained vote ledger simulation."""
    setup_logging(verbose)


# ─── Register all sub-modules ───────────────────────────────────
from votechain.cli import election_cmds  # noqa: E402, F401


if __name__ == "__main__":
    cli()
