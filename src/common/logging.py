"""Structured logging configuration.

structlogを標準loggingの上に構成する。アプリケーション層・インフラ層の
サービスは ``get_logger(__name__)`` でロガーを取得する。
"""

import logging
import sys

from typing import Any

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """ロギングを初期化する.

    Args:
        level: ログレベル名（"DEBUG", "INFO"など）
        json_logs: TrueならJSON形式、Falseなら開発向けのコンソール形式で出力
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """名前付きの構造化ロガーを取得する."""
    return structlog.get_logger(name)