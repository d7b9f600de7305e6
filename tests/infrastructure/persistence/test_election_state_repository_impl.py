"""ElectionStateRepositoryImplのテスト."""

import pytest

from src.domain.entities import Candidate, ElectionPosition
from src.domain.value_objects.election_phase import ElectionPhase
from src.infrastructure.exceptions import SerializationError
from src.infrastructure.persistence.election_state_repository_impl import (
    ElectionStateRepositoryImpl,
)
from src.infrastructure.persistence.in_memory_state_store import InMemoryStateStore


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def repository(store):
    return ElectionStateRepositoryImpl(store)


class TestElectionStateRepositoryImpl:
    """状態ストアのキーと保存形式のテスト."""

    def test_keys(self, repository):
        assert repository.key("phase") == "baobab_election_phase"
        assert repository.key("has_voted") == "baobab_election_has_voted"

    def test_custom_prefix(self, store):
        repository = ElectionStateRepositoryImpl(store, key_prefix="test_")

        assert repository.key("voters") == "test_election_voters"

    @pytest.mark.asyncio
    async def test_phase_defaults_to_idle(self, repository):
        assert await repository.get_phase() == ElectionPhase.IDLE

    @pytest.mark.asyncio
    async def test_phase_round_trip(self, repository, store):
        await repository.save_phase(ElectionPhase.REGISTRATION_CLOSED)

        assert await store.get("baobab_election_phase") == "REGISTRATION_CLOSED"
        assert await repository.get_phase() == ElectionPhase.REGISTRATION_CLOSED

    @pytest.mark.asyncio
    async def test_unknown_phase_is_idle(self, store):
        await store.set("baobab_election_phase", "PAUSED")

        repository = ElectionStateRepositoryImpl(store)

        assert await repository.get_phase() == ElectionPhase.IDLE

    @pytest.mark.asyncio
    async def test_candidates_stored_with_camel_case_keys(self, repository, store):
        await repository.save_candidates(
            [
                Candidate(
                    name="Amara",
                    position_id="p1",
                    student_id="S001",
                    manifesto="Better Wi-Fi",
                    votes=4,
                    id="c1",
                )
            ]
        )

        raw = await store.get("baobab_election_candidates")
        assert raw == [
            {
                "id": "c1",
                "studentId": "S001",
                "name": "Amara",
                "positionId": "p1",
                "manifesto": "Better Wi-Fi",
                "photo": None,
                "votes": 4,
            }
        ]

        candidates = await repository.get_candidates()
        assert candidates[0].votes == 4
        assert candidates[0].student_id == "S001"

    @pytest.mark.asyncio
    async def test_positions_round_trip(self, repository, store):
        await repository.save_positions(
            [
                ElectionPosition(title="President", description="Leads", id="p1"),
                ElectionPosition(title="Treasurer", id="p2"),
            ]
        )

        positions = await repository.get_positions()

        assert [p.id for p in positions] == ["p1", "p2"]
        assert positions[1].description == "Custom Position"
        assert (await store.get("baobab_election_positions"))[0]["maxVotes"] == 1

    @pytest.mark.asyncio
    async def test_voter_lists_are_deduplicated(self, repository):
        await repository.save_registered_voters(["s1", "s2", "s1"])
        await repository.save_voted_voters(["s2", "s2"])

        assert await repository.get_registered_voters() == ["s1", "s2"]
        assert await repository.get_voted_voters() == ["s2"]

    @pytest.mark.asyncio
    async def test_clear_voter_data(self, repository, store):
        await repository.save_registered_voters(["s1"])
        await repository.save_voted_voters(["s1"])
        await repository.save_phase(ElectionPhase.ENDED)

        await repository.clear_voter_data()

        assert store.keys() == ["baobab_election_phase"]
        assert await repository.get_registered_voters() == []

    @pytest.mark.asyncio
    async def test_malformed_candidate_raises(self, store):
        await store.set("baobab_election_candidates", [{"id": "c1"}])
        repository = ElectionStateRepositoryImpl(store)

        with pytest.raises(SerializationError):
            await repository.get_candidates()
