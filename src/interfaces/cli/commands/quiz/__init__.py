"""LMSクイズ CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.quiz.generate import generate
from src.interfaces.cli.commands.quiz.lifecycle import (
    delete,
    end,
    launch,
    list_quizzes,
    reset,
    save,
    schedule,
    submit,
)
from src.interfaces.cli.commands.quiz.sweep import sweep, watch


@click.group()
def quiz():
    """LMSクイズの管理コマンド."""
    pass


quiz.add_command(list_quizzes)
quiz.add_command(save)
quiz.add_command(schedule)
quiz.add_command(launch)
quiz.add_command(end)
quiz.add_command(reset)
quiz.add_command(delete)
quiz.add_command(submit)
quiz.add_command(sweep)
quiz.add_command(watch)
quiz.add_command(generate)
