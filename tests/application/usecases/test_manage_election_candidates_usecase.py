"""ManageElectionCandidatesUseCaseの単体テスト。"""

import pytest

from src.application.dtos.election_dto import (
    CreateCandidateInputDto,
    CreatePositionInputDto,
    DeleteCandidateInputDto,
    DeletePositionInputDto,
    ListRosterInputDto,
    UpdateCandidateInputDto,
)
from src.application.usecases.manage_election_candidates_usecase import (
    ManageElectionCandidatesUseCase,
)
from src.domain.entities.candidate import Candidate
from src.domain.entities.election_position import ElectionPosition
from src.domain.value_objects.election_phase import ElectionPhase
from src.infrastructure.persistence.election_state_repository_impl import (
    ElectionStateRepositoryImpl,
)
from src.infrastructure.persistence.in_memory_state_store import InMemoryStateStore


@pytest.fixture
def repository() -> ElectionStateRepositoryImpl:
    """インメモリストアを使う選挙状態リポジトリ。"""
    return ElectionStateRepositoryImpl(InMemoryStateStore())


@pytest.fixture
def usecase(
    repository: ElectionStateRepositoryImpl,
) -> ManageElectionCandidatesUseCase:
    """UseCaseのインスタンス。"""
    return ManageElectionCandidatesUseCase(election_state_repository=repository)


async def _seed(repository: ElectionStateRepositoryImpl) -> None:
    await repository.save_positions(
        [
            ElectionPosition(title="President", id="p1"),
            ElectionPosition(title="Treasurer", id="p2"),
        ]
    )
    await repository.save_candidates(
        [
            Candidate(name="Alice", position_id="p1", votes=4, id="c1"),
            Candidate(name="Bob", position_id="p2", id="c2"),
        ]
    )


class TestPositions:
    """役職管理のテスト。"""

    @pytest.mark.asyncio
    async def test_create_position(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """役職を追加すると一意なIDが採番される。"""
        result = await usecase.create_position(
            CreatePositionInputDto(title="  Social Secretary ")
        )

        assert result.success is True
        assert result.position_id.startswith("pos_")
        positions = await repository.get_positions()
        assert [(p.id, p.title, p.description) for p in positions] == [
            (result.position_id, "Social Secretary", "Custom Position")
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("dto", "message"),
        [
            (CreatePositionInputDto(title=" "), "Position title must not be blank"),
            (
                CreatePositionInputDto(title="Chair", max_votes=0),
                "A ballot selects exactly one candidate per position",
            ),
            (
                CreatePositionInputDto(title="Council", max_votes=2),
                "A ballot selects exactly one candidate per position",
            ),
        ],
    )
    async def test_create_position_invalid(
        self,
        usecase: ManageElectionCandidatesUseCase,
        dto: CreatePositionInputDto,
        message: str,
    ) -> None:
        """不正な入力は拒否する。"""
        result = await usecase.create_position(dto)

        assert result.success is False
        assert result.error_message == message

    @pytest.mark.asyncio
    async def test_delete_position_with_candidates(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """候補者がいる役職は削除できない。"""
        await _seed(repository)

        result = await usecase.delete_position(DeletePositionInputDto(id="p1"))

        assert result.success is False
        assert "still has candidates" in result.error_message
        assert len(await repository.get_positions()) == 2

    @pytest.mark.asyncio
    async def test_delete_empty_position(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """候補者のいない役職は削除できる。"""
        await _seed(repository)
        await usecase.delete_candidate(DeleteCandidateInputDto(id="c2"))

        result = await usecase.delete_position(DeletePositionInputDto(id="p2"))

        assert result.success is True
        assert [p.id for p in await repository.get_positions()] == ["p1"]

    @pytest.mark.asyncio
    async def test_delete_unknown_position(
        self, usecase: ManageElectionCandidatesUseCase
    ) -> None:
        """存在しない役職。"""
        result = await usecase.delete_position(DeletePositionInputDto(id="p9"))

        assert result.success is False
        assert result.error_message == "Unknown position: p9"


class TestCandidates:
    """候補者管理のテスト。"""

    @pytest.mark.asyncio
    async def test_create_candidate(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """候補者は得票0で追加される。"""
        await _seed(repository)

        result = await usecase.create_candidate(
            CreateCandidateInputDto(
                name="Carol", position_id="p1", manifesto="Longer library hours"
            )
        )

        assert result.success is True
        assert result.candidate_id.startswith("cand_")
        created = [
            c for c in await repository.get_candidates() if c.id == result.candidate_id
        ]
        assert len(created) == 1
        assert created[0].votes == 0
        assert created[0].manifesto == "Longer library hours"

    @pytest.mark.asyncio
    async def test_create_candidate_for_unknown_position(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """存在しない役職には追加できない。"""
        await _seed(repository)

        result = await usecase.create_candidate(
            CreateCandidateInputDto(name="Carol", position_id="p9")
        )

        assert result.success is False
        assert result.error_message == "Unknown position: p9"

    @pytest.mark.asyncio
    async def test_update_candidate_keeps_votes(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """更新しても得票数は変わらない。"""
        await _seed(repository)

        result = await usecase.update_candidate(
            UpdateCandidateInputDto(id="c1", name="Alice B.", position_id="p2")
        )

        assert result.success is True
        alice = next(c for c in await repository.get_candidates() if c.id == "c1")
        assert alice.name == "Alice B."
        assert alice.position_id == "p2"
        assert alice.votes == 4

    @pytest.mark.asyncio
    async def test_update_unknown_candidate(
        self, usecase: ManageElectionCandidatesUseCase
    ) -> None:
        """存在しない候補者。"""
        result = await usecase.update_candidate(UpdateCandidateInputDto(id="c9"))

        assert result.success is False
        assert result.error_message == "Unknown candidate: c9"

    @pytest.mark.asyncio
    async def test_delete_unknown_candidate(
        self, usecase: ManageElectionCandidatesUseCase
    ) -> None:
        """存在しない候補者の削除。"""
        result = await usecase.delete_candidate(DeleteCandidateInputDto(id="c9"))

        assert result.success is False

    @pytest.mark.asyncio
    async def test_list_roster_filtered(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """役職で候補者を絞り込む。"""
        await _seed(repository)

        output = await usecase.list_roster(ListRosterInputDto(position_id="p2"))

        assert output.success is True
        assert [p.id for p in output.positions] == ["p1", "p2"]
        assert [c.id for c in output.candidates] == ["c2"]


class TestRosterLock:
    """投票開始後の名簿固定のテスト。"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("phase", [ElectionPhase.VOTING, ElectionPhase.ENDED])
    async def test_changes_rejected_after_voting_starts(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
        phase: ElectionPhase,
    ) -> None:
        """投票開始後は追加・更新・削除のいずれも拒否する。"""
        await _seed(repository)
        await repository.save_phase(phase)
        expected = f"Roster cannot be changed during {phase.value}"

        results = [
            await usecase.create_position(CreatePositionInputDto(title="Chair")),
            await usecase.create_candidate(
                CreateCandidateInputDto(name="Eve", position_id="p1")
            ),
            await usecase.update_candidate(
                UpdateCandidateInputDto(id="c1", name="Mallory")
            ),
            await usecase.delete_candidate(DeleteCandidateInputDto(id="c2")),
            await usecase.delete_position(DeletePositionInputDto(id="p2")),
        ]

        assert all(r.success is False for r in results)
        assert {r.error_message for r in results} == {expected}
        assert len(await repository.get_candidates()) == 2

    @pytest.mark.asyncio
    async def test_changes_allowed_while_registration_closed(
        self,
        usecase: ManageElectionCandidatesUseCase,
        repository: ElectionStateRepositoryImpl,
    ) -> None:
        """登録締切後でも投票開始前なら変更できる。"""
        await _seed(repository)
        await repository.save_phase(ElectionPhase.REGISTRATION_CLOSED)

        result = await usecase.create_candidate(
            CreateCandidateInputDto(name="Eve", position_id="p1")
        )

        assert result.success is True
