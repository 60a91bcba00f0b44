"""CLI commands: serve, simulate."""

from __future__ import annotations

import asyncio
import sys

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from votechain import config
from votechain.cli import cli, console
from votechain.election import ElectionService
from votechain.i18n import SUPPORTED_LANGUAGES, get_trans, message_for
from votechain.render import chain_view, results_view


def _parse_ballot(value: str) -> tuple[str, str]:
    voter_id, sep, candidate = value.partition("=")
    if not sep:
        raise click.BadParameter(f"Expected VOTER=CANDIDATE, got {value!r}")
    return voter_id, candidate


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", type=int, default=None, help="Bind port")
def serve(host, port) -> None:
    """Run the HTTP API (state lives until the server stops)."""
    import uvicorn

    uvicorn.run(
        "votechain.api:app",
        host=host or config.HOST,
        port=port or config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


@cli.command()
@click.option("--candidate", "-c", "candidates", multiple=True, help="Candidate to register")
@click.option("--vote", "-b", "ballots", multiple=True, help="Ballot as VOTER=CANDIDATE")
@click.option(
    "--lang",
    type=click.Choice(sorted(SUPPORTED_LANGUAGES)),
    default=None,
    help="Message language",
)
def simulate(candidates, ballots, lang) -> None:
    """Run an election in memory and print results, ledger and audit."""
    lang = lang or config.DEFAULT_LANG
    parsed = [_parse_ballot(b) for b in ballots]

    async def _simulate_async() -> bool:
        election = await ElectionService.open()

        for name in candidates:
            result = election.register_candidate(name)
            if result.ok:
                console.print(f"[green]✓[/] {escape(get_trans('candidate_added', lang, name=result.value))}")
            else:
                console.print(f"[red]✗[/] {escape(message_for(result.error, lang))}")

        for voter_id, candidate in parsed:
            result = await election.cast_vote(voter_id, candidate)
            if result.ok:
                console.print(
                    f"[green]✓[/] {escape(get_trans('vote_recorded', lang, candidate=candidate))} "
                    f"[dim]#{result.value.index} {result.value.hash[:16]}...[/]"
                )
            else:
                console.print(f"[red]✗[/] \\[{escape(voter_id)}] {escape(message_for(result.error, lang))}")

        table = Table(title="📊 Results")
        table.add_column("#", style="dim", width=4)
        table.add_column("Result", style="cyan")
        for rank, line in enumerate(results_view(election.tally(), lang), start=1):
            table.add_row(str(rank), escape(line))
        console.print(table)

        for view in chain_view(election.get_chain(), lang):
            console.print(
                Panel(
                    f"[bold cyan]Timestamp:[/] {view.timestamp}\n"
                    f"[bold cyan]Data:[/] {escape(view.data)}\n"
                    f"[bold cyan]Previous Hash:[/] {view.previous_hash}\n"
                    f"[bold cyan]Hash:[/] {view.hash}",
                    title=view.title,
                    border_style="blue",
                )
            )

        report = election.audit()
        if report.valid:
            console.print(f"[green]✅ {get_trans('ledger_valid', lang, count=report.blocks_checked)}[/]")
        else:
            console.print(f"[red]❌ {get_trans('ledger_invalid', lang)}[/]")
            for v in report.violations:
                console.print(f"  [red]✗[/] {v['type']} @ #{v.get('index', 'N/A')}")
        return report.valid

    if not asyncio.run(_simulate_async()):
        sys.exit(1)
