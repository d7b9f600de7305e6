"""クイズの保存・状態操作・採点コマンド."""

import asyncio
import json

from pathlib import Path
from typing import Any

import click

from src.application.dtos.quiz_dto import (
    QuizActionInputDto,
    QuizActionOutputDto,
    SaveAssessmentInputDto,
    ScheduleQuizInputDto,
    SubmitQuizInputDto,
)
from src.domain.entities.quiz import Quiz, QuizStatus
from src.domain.value_objects.quiz_question import QuizQuestion
from src.infrastructure.persistence.quiz_repository_impl import QuizRepositoryImpl
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


async def _call(method: str, *args: Any) -> Any:
    container = resolve_container()
    try:
        usecase = container.use_cases.manage_quiz_lifecycle_usecase()
        return await getattr(usecase, method)(*args)
    finally:
        await close_state_store(container)


def _load_json(path: str, param_hint: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint=param_hint) from e


def _load_questions(path: str) -> list[QuizQuestion]:
    data = _load_json(path, "QUESTIONS_FILE")
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise click.BadParameter(
            "expected a list of questions", param_hint="QUESTIONS_FILE"
        )
    try:
        return [QuizRepositoryImpl.question_from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise click.BadParameter(
            f"malformed question: {e}", param_hint="QUESTIONS_FILE"
        ) from e


def _report(result: QuizActionOutputDto, message: str) -> None:
    if not result.success:
        BaseCommand.error(result.error_message or "Quiz operation rejected")
    status = f" ({result.status.value})" if result.status else ""
    BaseCommand.success(f"{message}{status}")


@click.command("list")
@with_error_handling
def list_quizzes():
    """全レベルのクイズを表示する."""
    output = asyncio.run(_call("list_quizzes"))
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to load quizzes")
    if not output.quizzes:
        click.echo("No quizzes.")
        return
    for quiz in output.quizzes:
        started = (
            f" started {quiz.started_at.isoformat(timespec='minutes')}"
            if quiz.started_at
            else ""
        )
        click.echo(
            f"  {quiz.level_id:<20} {quiz.status.value:<10} "
            f"{quiz.title} ({quiz.question_count} questions, "
            f"{quiz.duration_minutes} min){started}"
        )


@click.command()
@click.argument("level_id")
@click.argument("questions_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--title", required=True, help="クイズのタイトル")
@click.option(
    "--duration",
    type=int,
    default=Quiz.DEFAULT_DURATION_MINUTES,
    show_default=True,
    help="制限時間（分）",
)
@click.option(
    "--status",
    type=click.Choice([QuizStatus.DRAFT.value, QuizStatus.SCHEDULED.value]),
    default=QuizStatus.SCHEDULED.value,
    show_default=True,
)
@click.option("--scheduled-date", default=None, help="実施予定日")
@with_error_handling
def save(
    level_id: str,
    questions_file: str,
    title: str,
    duration: int,
    status: str,
    scheduled_date: str | None,
):
    """JSONファイルの設問でレベルのクイズを保存する."""
    questions = _load_questions(questions_file)
    output = asyncio.run(
        _call(
            "save_assessment",
            SaveAssessmentInputDto(
                level_id=level_id,
                title=title,
                questions=questions,
                duration_minutes=duration,
                status=QuizStatus(status),
                scheduled_date=scheduled_date,
            ),
        )
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Failed to save quiz")
    BaseCommand.success(
        f"Quiz saved for {level_id}: {output.quiz.question_count} questions"
    )


@click.command()
@click.argument("level_id")
@click.option("--date", "scheduled_date", default=None, help="実施予定日")
@with_error_handling
def schedule(level_id: str, scheduled_date: str | None):
    """Draftのクイズを予定登録する."""
    result = asyncio.run(
        _call(
            "schedule",
            ScheduleQuizInputDto(level_id=level_id, scheduled_date=scheduled_date),
        )
    )
    _report(result, f"Quiz scheduled for {level_id}")


@click.command()
@click.argument("level_id")
@with_error_handling
def launch(level_id: str):
    """クイズを開始する（完了済みなら再実施）."""
    result = asyncio.run(_call("launch", QuizActionInputDto(level_id=level_id)))
    _report(result, f"Quiz launched for {level_id}")


@click.command()
@click.argument("level_id")
@with_error_handling
def end(level_id: str):
    """実施中のクイズを終了する."""
    result = asyncio.run(_call("end", QuizActionInputDto(level_id=level_id)))
    _report(result, f"Quiz ended for {level_id}")


@click.command()
@click.argument("level_id")
@with_error_handling
def reset(level_id: str):
    """クイズを下書きに戻す."""
    result = asyncio.run(
        _call("reset_to_draft", QuizActionInputDto(level_id=level_id))
    )
    _report(result, f"Quiz reset to draft for {level_id}")


@click.command()
@click.argument("level_id")
@click.option("--yes", is_flag=True, help="確認を省略する")
@with_error_handling
def delete(level_id: str, yes: bool):
    """レベルのクイズを削除する."""
    if not yes and not click.confirm(f"Delete the quiz for {level_id}?"):
        click.echo("Cancelled.")
        return
    result = asyncio.run(_call("delete", QuizActionInputDto(level_id=level_id)))
    _report(result, f"Quiz deleted for {level_id}")


@click.command()
@click.argument("level_id")
@click.argument("answers_file", type=click.Path(exists=True, dir_okay=False))
@with_error_handling
def submit(level_id: str, answers_file: str):
    """JSONファイルの回答（設問ID → 回答）を採点する."""
    answers = _load_json(answers_file, "ANSWERS_FILE")
    if not isinstance(answers, dict):
        raise click.BadParameter(
            "expected an object of question id to answer", param_hint="ANSWERS_FILE"
        )
    output = asyncio.run(
        _call("submit", SubmitQuizInputDto(level_id=level_id, answers=answers))
    )
    if not output.success:
        BaseCommand.error(output.error_message or "Submission rejected")
    click.echo(
        f"Score: {output.score}% "
        f"({output.correct_count}/{output.total_questions} correct)"
    )
