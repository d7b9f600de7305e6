"""Infrastructure layer exceptions."""

from typing import Any


class InfrastructureException(Exception):
    """インフラ層の例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class DatabaseError(InfrastructureException):
    """状態ストア（データベース）操作の失敗."""


class SerializationError(InfrastructureException):
    """永続化データのシリアライズ/デシリアライズの失敗."""


class LLMError(InfrastructureException):
    """LLMサービス呼び出しの失敗."""
