"""Key/value state store interface."""

from abc import ABC, abstractmethod
from typing import Any


class IStateStore(ABC):
    """キーごとにJSON互換の値を保存する永続ストアのインターフェース.

    各キーは独立しており、複数キーをまたぐトランザクションはない。
    書き込みは呼び出しが返った時点で永続化されていること。
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """キーの値を取得する。存在しなければNone."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """キーに値を保存する（上書き）."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """キーを削除する。存在しなくてもエラーにしない."""
        pass

    async def close(self) -> None:
        """ストアが保持するリソースを解放する."""
        return None
