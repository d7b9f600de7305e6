"""Baobab Campus CLI エントリーポイント."""

import click

from src.common.logging import setup_logging
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.commands.accounting import accounting
from src.interfaces.cli.commands.election import election
from src.interfaces.cli.commands.quiz import quiz


@click.group()
@click.option("--log-level", default=None, help="ログレベル（省略時は設定値）")
@click.option("--json-logs", is_flag=True, help="JSON形式でログ出力")
def cli(log_level: str | None, json_logs: bool):
    """Baobab Campus - 学生選挙・LMSクイズ・会計分析の管理ツール."""
    settings = get_settings()
    setup_logging(
        level=log_level or settings.log_level,
        json_logs=json_logs or settings.log_json,
    )


cli.add_command(election)
cli.add_command(quiz)
cli.add_command(accounting)


if __name__ == "__main__":
    cli()
