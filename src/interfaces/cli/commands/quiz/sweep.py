"""実施中クイズの自動終了コマンド."""

import asyncio
import contextlib
import signal

import click

from src.application.dtos.quiz_dto import SweepExpiredOutputDto
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


@click.command()
@with_error_handling
def sweep():
    """制限時間と猶予を過ぎた実施中のクイズを1回だけ完了にする."""
    output = asyncio.run(_run_sweep())
    if not output.success:
        BaseCommand.error(output.error_message or "Sweep failed")
    if output.expired_level_ids:
        BaseCommand.success(f"Completed: {', '.join(output.expired_level_ids)}")
    else:
        click.echo("No overdue quizzes.")


@click.command()
@with_error_handling
def watch():
    """停止するまで定期的に自動終了処理を実行する（Ctrl+Cで停止）."""
    passes = asyncio.run(_run_watch())
    click.echo(f"Sweeper stopped after {passes} passes.")


async def _run_sweep() -> SweepExpiredOutputDto:
    container = resolve_container()
    try:
        sweeper = container.use_cases.quiz_expiry_sweeper()
        return await sweeper.run_once()
    finally:
        await close_state_store(container)


async def _run_watch() -> int:
    container = resolve_container()
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Windowsのイベントループはシグナルハンドラに対応していない
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_event.set)
    try:
        sweeper = container.use_cases.quiz_expiry_sweeper()
        click.echo(
            f"Sweeping every {sweeper.interval_seconds}s. Press Ctrl+C to stop."
        )
        return await sweeper.run(stop_event)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(sig)
        await close_state_store(container)
