"""開票結果表示コマンド."""

import asyncio

import click

from src.application.dtos.election_dto import (
    ElectionResultsOutputDto,
    GetResultsInputDto,
)
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


@click.command()
@click.option("--position", "position_id", default=None, help="役職IDで絞り込む")
@with_error_handling
def results(position_id: str | None):
    """役職ごとの開票結果を表示する."""
    output = asyncio.run(_run_results(position_id))
    if not output.success:
        BaseCommand.error(output.error_message or "Results unavailable")

    if output.is_live:
        BaseCommand.warning("Voting is still open; these are live counts")
    if not output.results:
        click.echo("No positions have candidates.")
        return

    for result in output.results:
        click.echo(f"\n=== {result.position_title} ({result.total_votes} votes) ===")
        for i, tally in enumerate(result.tallies, 1):
            click.echo(
                f"  {i:>2}. {tally.candidate_name:<30} "
                f"{tally.votes:>6,}  {tally.percentage:5.1f}%"
            )
        if result.winner:
            click.echo(f"  Winner: {result.winner.candidate_name}")


async def _run_results(position_id: str | None) -> ElectionResultsOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.get_election_results_usecase()
        return await usecase.execute(GetResultsInputDto(position_id=position_id))
    finally:
        await close_state_store(container)
