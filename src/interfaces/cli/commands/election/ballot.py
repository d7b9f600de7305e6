"""選挙人登録・投票コマンド."""

import asyncio

import click

from src.application.dtos.election_dto import (
    CastBallotInputDto,
    CastBallotOutputDto,
    RegisterVoterInputDto,
    RegisterVoterOutputDto,
)
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


def _parse_selections(values: tuple[str, ...]) -> dict[str, str]:
    """``POSITION_ID=CANDIDATE_ID`` 形式の指定を辞書にする."""
    selections: dict[str, str] = {}
    for value in values:
        position_id, sep, candidate_id = value.partition("=")
        if not sep or not position_id.strip() or not candidate_id.strip():
            raise click.BadParameter(
                f"expected POSITION_ID=CANDIDATE_ID, got {value!r}",
                param_hint="--select",
            )
        if position_id.strip() in selections:
            raise click.BadParameter(
                f"position {position_id.strip()} selected more than once",
                param_hint="--select",
            )
        selections[position_id.strip()] = candidate_id.strip()
    return selections


@click.command()
@click.argument("voter_id")
@with_error_handling
def register(voter_id: str):
    """選挙人名簿に登録する."""
    result = asyncio.run(_run_register(voter_id))
    if not result.success:
        BaseCommand.error(result.error_message or "Registration failed")
    if result.already_registered:
        BaseCommand.warning(f"{voter_id} is already registered")
    else:
        BaseCommand.success(f"{voter_id} registered")


@click.command()
@click.argument("voter_id")
@click.option(
    "--select",
    "selections",
    multiple=True,
    required=True,
    help="POSITION_ID=CANDIDATE_ID（投票対象の役職ごとに1つ）",
)
@with_error_handling
def vote(voter_id: str, selections: tuple[str, ...]):
    """投票する（全ての役職を選択した投票用紙のみ受け付ける）."""
    parsed = _parse_selections(selections)
    result = asyncio.run(_run_vote(voter_id, parsed))
    if not result.success:
        BaseCommand.error(result.error_message or "Ballot rejected")
    BaseCommand.success("Ballot recorded")


async def _run_register(voter_id: str) -> RegisterVoterOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.cast_ballot_usecase()
        return await usecase.register_voter(RegisterVoterInputDto(voter_id=voter_id))
    finally:
        await close_state_store(container)


async def _run_vote(voter_id: str, selections: dict[str, str]) -> CastBallotOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.cast_ballot_usecase()
        return await usecase.cast_ballot(
            CastBallotInputDto(voter_id=voter_id, selections=selections)
        )
    finally:
        await close_state_store(container)
