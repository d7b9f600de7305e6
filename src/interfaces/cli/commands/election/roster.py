"""役職・候補者管理コマンド."""

import asyncio

from typing import Any

import click

from src.application.dtos.election_dto import (
    CreateCandidateInputDto,
    CreatePositionInputDto,
    DeleteCandidateInputDto,
    DeletePositionInputDto,
    ListRosterInputDto,
    UpdateCandidateInputDto,
)
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


async def _call(method: str, *args: Any) -> Any:
    container = resolve_container()
    try:
        usecase = container.use_cases.manage_election_candidates_usecase()
        return await getattr(usecase, method)(*args)
    finally:
        await close_state_store(container)


@click.command()
@click.option("--position", "position_id", default=None, help="役職IDで絞り込む")
@with_error_handling
def roster(position_id: str | None):
    """役職と候補者の一覧を表示する."""
    output = asyncio.run(
        _call("list_roster", ListRosterInputDto(position_id=position_id))
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to load roster")

    if not output.positions:
        click.echo("No positions defined.")
        return
    for position in output.positions:
        if position_id is not None and position.id != position_id:
            continue
        click.echo(f"\n{position.title} [{position.id}] - {position.description}")
        standing = [c for c in output.candidates if c.position_id == position.id]
        if not standing:
            click.echo("  (no candidates)")
        for candidate in standing:
            student = f" ({candidate.student_id})" if candidate.student_id else ""
            click.echo(f"  - {candidate.name}{student} [{candidate.id}]")


@click.command("add-position")
@click.argument("title")
@click.option("--description", default=None, help="役職の説明")
@with_error_handling
def add_position(title: str, description: str | None):
    """役職を追加する."""
    input_dto = CreatePositionInputDto(title=title)
    if description is not None:
        input_dto.description = description
    output = asyncio.run(_call("create_position", input_dto))
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to add position")
    BaseCommand.success(f"Position added: {output.position_id}")


@click.command("delete-position")
@click.argument("position_id")
@with_error_handling
def delete_position(position_id: str):
    """役職を削除する（候補者がいる場合は不可）."""
    output = asyncio.run(
        _call("delete_position", DeletePositionInputDto(id=position_id))
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to delete position")
    BaseCommand.success(f"Position deleted: {position_id}")


@click.command("add-candidate")
@click.argument("name")
@click.option("--position", "position_id", required=True, help="立候補する役職ID")
@click.option("--student-id", default="", help="学籍番号")
@click.option("--manifesto", default="", help="公約")
@click.option("--photo", default=None, help="写真のURL")
@with_error_handling
def add_candidate(
    name: str, position_id: str, student_id: str, manifesto: str, photo: str | None
):
    """候補者を追加する."""
    output = asyncio.run(
        _call(
            "create_candidate",
            CreateCandidateInputDto(
                name=name,
                position_id=position_id,
                student_id=student_id,
                manifesto=manifesto,
                photo=photo,
            ),
        )
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to add candidate")
    BaseCommand.success(f"Candidate added: {output.candidate_id}")


@click.command("update-candidate")
@click.argument("candidate_id")
@click.option("--name", default=None)
@click.option("--position", "position_id", default=None)
@click.option("--student-id", default=None)
@click.option("--manifesto", default=None)
@click.option("--photo", default=None)
@with_error_handling
def update_candidate(
    candidate_id: str,
    name: str | None,
    position_id: str | None,
    student_id: str | None,
    manifesto: str | None,
    photo: str | None,
):
    """候補者の情報を更新する（得票数は変更できない）."""
    output = asyncio.run(
        _call(
            "update_candidate",
            UpdateCandidateInputDto(
                id=candidate_id,
                name=name,
                position_id=position_id,
                student_id=student_id,
                manifesto=manifesto,
                photo=photo,
            ),
        )
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to update candidate")
    BaseCommand.success(f"Candidate updated: {candidate_id}")


@click.command("delete-candidate")
@click.argument("candidate_id")
@with_error_handling
def delete_candidate(candidate_id: str):
    """候補者を削除する."""
    output = asyncio.run(
        _call("delete_candidate", DeleteCandidateInputDto(id=candidate_id))
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to delete candidate")
    BaseCommand.success(f"Candidate deleted: {candidate_id}")
