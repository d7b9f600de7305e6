"""AIによるクイズ設問生成コマンド."""

import asyncio

import click

from src.application.dtos.quiz_dto import (
    GenerateQuizQuestionsInputDto,
    GenerateQuizQuestionsOutputDto,
)
from src.domain.services.interfaces.llm_service import QUIZ_GENERATION_DEFAULT_COUNT
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


@click.command()
@click.argument("level_id")
@click.argument("topic")
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=QUIZ_GENERATION_DEFAULT_COUNT,
    show_default=True,
    help="生成する設問数",
)
@with_error_handling
def generate(level_id: str, topic: str, count: int):
    """トピックから4択問題を生成し、レベルのクイズに追加する."""
    BaseCommand.show_progress(f"Generating {count} questions about {topic!r}...")
    output = asyncio.run(_run_generate(level_id, topic, count))
    if not output.success:
        BaseCommand.error(output.error_message or "Question generation failed")
    BaseCommand.success(
        f"Added {output.generated_count} questions "
        f"({output.total_questions} total) to {level_id}"
    )


async def _run_generate(
    level_id: str, topic: str, count: int
) -> GenerateQuizQuestionsOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.generate_quiz_questions_usecase()
        return await usecase.execute(
            GenerateQuizQuestionsInputDto(level_id=level_id, topic=topic, count=count)
        )
    finally:
        await close_state_store(container)
