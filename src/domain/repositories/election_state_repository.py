"""Election state repository interface."""

from abc import ABC, abstractmethod

from src.domain.entities.candidate import Candidate
from src.domain.entities.election_position import ElectionPosition
from src.domain.value_objects.election_phase import ElectionPhase


class ElectionStateRepository(ABC):
    """選挙の永続状態（フェーズ・役職・候補者・選挙人名簿・投票済み集合）の
    リポジトリインターフェース."""

    @abstractmethod
    async def get_phase(self) -> ElectionPhase:
        """現在のフェーズを取得する。未保存ならIDLE."""
        pass

    @abstractmethod
    async def save_phase(self, phase: ElectionPhase) -> None:
        pass

    @abstractmethod
    async def get_positions(self) -> list[ElectionPosition]:
        """役職一覧を登録順で取得する."""
        pass

    @abstractmethod
    async def save_positions(self, positions: list[ElectionPosition]) -> None:
        pass

    @abstractmethod
    async def get_candidates(self) -> list[Candidate]:
        """候補者一覧を登録順で取得する."""
        pass

    @abstractmethod
    async def save_candidates(self, candidates: list[Candidate]) -> None:
        pass

    @abstractmethod
    async def get_registered_voters(self) -> list[str]:
        """選挙人名簿（登録順、重複なし）を取得する."""
        pass

    @abstractmethod
    async def save_registered_voters(self, voter_ids: list[str]) -> None:
        pass

    @abstractmethod
    async def get_voted_voters(self) -> list[str]:
        """投票済みの投票者ID一覧を取得する."""
        pass

    @abstractmethod
    async def save_voted_voters(self, voter_ids: list[str]) -> None:
        pass

    @abstractmethod
    async def clear_voter_data(self) -> None:
        """選挙人名簿と投票済み集合を削除する."""
        pass
