"""ElectionPosition entity."""

from src.domain.entities.base import BaseEntity


class ElectionPosition(BaseEntity):
    """学生選挙で選出される役職（会長、副会長など）."""

    DEFAULT_DESCRIPTION = "Custom Position"

    def __init__(
        self,
        title: str,
        description: str = DEFAULT_DESCRIPTION,
        max_votes: int = 1,
        id: str | None = None,
    ) -> None:
        """役職エンティティを初期化する.

        Args:
            title: 役職名
            description: 説明
            max_votes: 保存データの選択可能数。投票は常に1役職につき1名
            id: 役職ID
        """
        super().__init__(id)
        self.title = title
        self.description = description
        self.max_votes = max_votes

    def __str__(self) -> str:
        return f"{self.title} ({self.id})"
