"""In-memory state store."""

import json

from typing import Any

from src.domain.repositories.state_store import IStateStore
from src.infrastructure.exceptions import SerializationError


class InMemoryStateStore(IStateStore):
    """プロセス内の辞書に値を保持する状態ストア.

    値はJSON文字列として保持し、読み出しのたびにデコードする。
    永続ストアと同じくJSON化できない値は保存できず、
    呼び出し側が返り値を書き換えても保存内容は変わらない。
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = self._encode(key, value)

    @staticmethod
    def _encode(key: str, value: Any) -> str:
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                "Value is not JSON serializable", {"key": key, "error": str(e)}
            ) from e

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = self._encode(key, value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """保存されているキー一覧."""
        return list(self._data)
