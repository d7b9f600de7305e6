"""選挙フェーズ操作コマンド."""

import asyncio

import click

from src.application.dtos.election_dto import (
    ElectionStatusOutputDto,
    PhaseTransitionOutputDto,
    ResetElectionInputDto,
)
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


@click.command("start-registration")
@with_error_handling
def start_registration():
    """選挙人登録を開始する."""
    _report(asyncio.run(_run_transition("start_registration")))


@click.command("end-registration")
@with_error_handling
def end_registration():
    """選挙人登録を締め切る."""
    _report(asyncio.run(_run_transition("end_registration")))


@click.command("start-voting")
@with_error_handling
def start_voting():
    """投票を開始する."""
    _report(asyncio.run(_run_transition("start_voting")))


@click.command("end-voting")
@with_error_handling
def end_voting():
    """投票を終了する."""
    _report(asyncio.run(_run_transition("end_voting")))


@click.command()
@click.option("--yes", is_flag=True, help="確認を省略してリセットする")
@with_error_handling
def reset(yes: bool):
    """選挙をリセットする（名簿・投票済み・得票数を消去）."""
    confirmed = yes or click.confirm(
        "Reset the election? This clears voters, ballots and vote counts.",
        default=False,
    )
    _report(asyncio.run(_run_reset(confirmed)))


@click.command()
@with_error_handling
def status():
    """現在のフェーズと投票率を表示する."""
    result = asyncio.run(_run_status())
    if not result.success:
        BaseCommand.error(result.error_message or "Failed to load status")

    click.echo("=== Election status ===")
    click.echo(f"  Phase:      {result.phase.label}")
    click.echo(f"  Registered: {result.registered_count:,}")
    click.echo(f"  Voted:      {result.voted_count:,}")
    click.echo(f"  Turnout:    {result.turnout_percentage}%")
    if result.available_actions:
        click.echo(f"  Next:       {', '.join(result.available_actions)}")


async def _run_transition(action: str) -> PhaseTransitionOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.manage_election_phase_usecase()
        return await getattr(usecase, action)()
    finally:
        await close_state_store(container)


async def _run_reset(confirmed: bool) -> PhaseTransitionOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.manage_election_phase_usecase()
        return await usecase.reset(ResetElectionInputDto(confirmed=confirmed))
    finally:
        await close_state_store(container)


async def _run_status() -> ElectionStatusOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.manage_election_phase_usecase()
        return await usecase.get_status()
    finally:
        await close_state_store(container)


def _report(result: PhaseTransitionOutputDto) -> None:
    if not result.success:
        BaseCommand.error(result.error_message or "Phase change rejected")
    BaseCommand.success(f"Phase is now {result.phase.label}")
