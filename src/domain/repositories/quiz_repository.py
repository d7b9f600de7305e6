"""Quiz repository interface."""

from abc import ABC, abstractmethod

from src.domain.entities.quiz import Quiz


class QuizRepository(ABC):
    """コンピテンシーレベルごとのクイズ（0..1件）のリポジトリインターフェース."""

    @abstractmethod
    async def get_by_level(self, level_id: str) -> Quiz | None:
        """レベルに紐づくクイズを取得する."""
        pass

    @abstractmethod
    async def get_all(self) -> dict[str, Quiz]:
        """全レベルのクイズを取得する.

        Returns:
            レベルID → クイズ
        """
        pass

    @abstractmethod
    async def save(self, level_id: str, quiz: Quiz) -> Quiz:
        """レベルのクイズを保存する（既存は置き換え）."""
        pass

    @abstractmethod
    async def save_many(self, quizzes: dict[str, Quiz]) -> None:
        """複数レベルのクイズをまとめて保存する."""
        pass

    @abstractmethod
    async def delete(self, level_id: str) -> bool:
        """レベルのクイズを削除する.

        Returns:
            削除した場合True、存在しなかった場合False
        """
        pass
