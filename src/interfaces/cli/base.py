"""CLIコマンドの共通基盤."""

import functools
import sys

from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import click

from src.common.logging import get_logger


logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BaseCommand:
    """コマンド出力の共通ヘルパー."""

    @staticmethod
    def show_progress(message: str) -> None:
        click.echo(message)

    @staticmethod
    def success(message: str) -> None:
        click.echo(click.style(f"✓ {message}", fg="green"))

    @staticmethod
    def warning(message: str) -> None:
        click.echo(click.style(f"! {message}", fg="yellow"))

    @staticmethod
    def error(message: str, exit_code: int = 1) -> NoReturn:
        """エラーを表示して終了する."""
        click.echo(click.style(f"✗ {message}", fg="red"), err=True)
        sys.exit(exit_code)


def with_error_handling(func: F) -> F:
    """予期しない例外をエラー表示と終了コード1に変換するデコレータ."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.Abort, click.exceptions.Exit):
            raise
        except SystemExit:
            raise
        except Exception as e:
            logger.exception("Command failed", command=func.__name__)
            click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
            sys.exit(1)

    return wrapper  # type: ignore[return-value]


def resolve_container() -> Any:
    """DIコンテナを取得する（未初期化なら初期化する）."""
    from src.infrastructure.di.container import get_container, init_container

    try:
        return get_container()
    except RuntimeError:
        # Container not initialized yet
        return init_container()


async def close_state_store(container: Any) -> None:
    """コマンド終了時に状態ストアの接続を解放する."""
    await container.database.state_store().close()
