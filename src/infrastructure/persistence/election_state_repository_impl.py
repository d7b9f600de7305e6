"""Election state repository implementation backed by a key/value state store."""

import logging

from typing import Any

from src.domain.entities.candidate import Candidate
from src.domain.entities.election_position import ElectionPosition
from src.domain.repositories.election_state_repository import (
    ElectionStateRepository,
)
from src.domain.repositories.state_store import IStateStore
from src.domain.value_objects.election_phase import ElectionPhase
from src.infrastructure.exceptions import SerializationError


logger = logging.getLogger(__name__)


class ElectionStateRepositoryImpl(ElectionStateRepository):
    """選挙状態を状態ストアの独立したキーに保存するリポジトリ.

    キー（接頭辞 ``{prefix}election_``）:
        phase / positions / candidates / voters / has_voted

    キー間の書き込みは原子的ではない。投票処理では候補者→投票済み集合の
    順に書き込む。
    """

    def __init__(self, store: IStateStore, key_prefix: str = "baobab_"):
        self.store = store
        self._prefix = f"{key_prefix}election_"

    def key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    # --- phase ---

    async def get_phase(self) -> ElectionPhase:
        raw = await self.store.get(self.key("phase"))
        phase = ElectionPhase.parse(raw)
        if raw is not None and phase.value != raw:
            logger.warning(f"Unknown election phase {raw!r} in store; using IDLE")
        return phase

    async def save_phase(self, phase: ElectionPhase) -> None:
        await self.store.set(self.key("phase"), phase.value)

    # --- positions ---

    async def get_positions(self) -> list[ElectionPosition]:
        rows = await self.store.get(self.key("positions")) or []
        return [self._dict_to_position(row) for row in rows]

    async def save_positions(self, positions: list[ElectionPosition]) -> None:
        await self.store.set(
            self.key("positions"), [self._position_to_dict(p) for p in positions]
        )

    # --- candidates ---

    async def get_candidates(self) -> list[Candidate]:
        rows = await self.store.get(self.key("candidates")) or []
        return [self._dict_to_candidate(row) for row in rows]

    async def save_candidates(self, candidates: list[Candidate]) -> None:
        await self.store.set(
            self.key("candidates"), [self._candidate_to_dict(c) for c in candidates]
        )

    # --- voters ---

    async def get_registered_voters(self) -> list[str]:
        return self._as_id_list(await self.store.get(self.key("voters")))

    async def save_registered_voters(self, voter_ids: list[str]) -> None:
        await self.store.set(self.key("voters"), list(dict.fromkeys(voter_ids)))

    async def get_voted_voters(self) -> list[str]:
        return self._as_id_list(await self.store.get(self.key("has_voted")))

    async def save_voted_voters(self, voter_ids: list[str]) -> None:
        await self.store.set(self.key("has_voted"), list(dict.fromkeys(voter_ids)))

    async def clear_voter_data(self) -> None:
        await self.store.delete(self.key("voters"))
        await self.store.delete(self.key("has_voted"))

    # --- conversions ---

    @staticmethod
    def _as_id_list(value: Any) -> list[str]:
        if value is None:
            return []
        return list(dict.fromkeys(str(v) for v in value))

    def _position_to_dict(self, position: ElectionPosition) -> dict[str, Any]:
        return {
            "id": position.id,
            "title": position.title,
            "description": position.description,
            "maxVotes": position.max_votes,
        }

    def _dict_to_position(self, data: dict[str, Any]) -> ElectionPosition:
        try:
            return ElectionPosition(
                id=data["id"],
                title=data["title"],
                description=data.get(
                    "description", ElectionPosition.DEFAULT_DESCRIPTION
                ),
                max_votes=int(data.get("maxVotes", 1)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(
                "Malformed election position in store",
                {"key": self.key("positions"), "error": str(e)},
            ) from e

    def _candidate_to_dict(self, candidate: Candidate) -> dict[str, Any]:
        return {
            "id": candidate.id,
            "studentId": candidate.student_id,
            "name": candidate.name,
            "positionId": candidate.position_id,
            "manifesto": candidate.manifesto,
            "photo": candidate.photo,
            "votes": candidate.votes,
        }

    def _dict_to_candidate(self, data: dict[str, Any]) -> Candidate:
        try:
            return Candidate(
                id=data["id"],
                student_id=data.get("studentId", ""),
                name=data["name"],
                position_id=data["positionId"],
                manifesto=data.get("manifesto", ""),
                photo=data.get("photo"),
                votes=int(data.get("votes", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(
                "Malformed candidate in store",
                {"key": self.key("candidates"), "error": str(e)},
            ) from e
