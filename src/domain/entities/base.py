"""Base entity for domain entities."""

from typing import Any


class BaseEntity:
    """ドメインエンティティの基底クラス.

    IDが同じ同型エンティティを等価とみなす。IDは永続化前にはNoneになり得る。
    """

    def __init__(self, id: str | None = None) -> None:
        self.id = id

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))
