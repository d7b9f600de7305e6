"""選挙・クイズの一連の操作をDIコンテナ経由で検証する統合テスト."""

from datetime import UTC, datetime, timedelta

import pytest

from src.application.dtos.election_dto import (
    CastBallotInputDto,
    CreateCandidateInputDto,
    CreatePositionInputDto,
    GetResultsInputDto,
    RegisterVoterInputDto,
    ResetElectionInputDto,
)
from src.application.dtos.quiz_dto import QuizActionInputDto, SaveAssessmentInputDto
from src.application.usecases.manage_quiz_lifecycle_usecase import (
    ManageQuizLifecycleUseCase,
)
from src.domain.entities.quiz import QuizStatus
from src.domain.value_objects.election_phase import ElectionPhase
from src.domain.value_objects.quiz_question import QuizQuestion
from src.infrastructure.config.settings import Settings
from src.infrastructure.di.container import init_container, reset_container


@pytest.fixture
def container(tmp_path):
    """SQLiteファイルを使うコンテナ。"""
    reset_container()
    settings = Settings(
        _env_file=None,
        google_api_key=None,
        database_url=f"sqlite:///{tmp_path / 'campus.db'}",
        quiz_grace_period_minutes=15,
    )
    yield init_container(settings)
    reset_container()


@pytest.mark.integration
class TestElectionScenario:
    """選挙の一連の流れ。"""

    @pytest.mark.asyncio
    async def test_election_from_registration_to_results(self, container) -> None:
        """登録→投票→終了→開票→リセット。"""
        phase = container.use_cases.manage_election_phase_usecase()
        roster = container.use_cases.manage_election_candidates_usecase()
        ballots = container.use_cases.cast_ballot_usecase()
        results = container.use_cases.get_election_results_usecase()
        try:
            president = await roster.create_position(
                CreatePositionInputDto(title="President")
            )
            await roster.create_position(CreatePositionInputDto(title="Secretary"))
            alice = await roster.create_candidate(
                CreateCandidateInputDto(name="Alice", position_id=president.position_id)
            )
            bob = await roster.create_candidate(
                CreateCandidateInputDto(name="Bob", position_id=president.position_id)
            )

            # 登録期間外の投票終了は何も変えない
            rejected = await phase.end_voting()
            assert rejected.success is False
            assert (await phase.get_status()).phase == ElectionPhase.IDLE

            await phase.start_registration()
            rejected = await phase.end_voting()
            assert rejected.success is False
            assert rejected.phase == ElectionPhase.REGISTRATION

            for voter_id in ("s1", "s2", "s3", "s4"):
                await ballots.register_voter(RegisterVoterInputDto(voter_id=voter_id))
            await phase.start_voting()

            for voter_id, choice in (
                ("s1", alice.candidate_id),
                ("s2", alice.candidate_id),
                ("s3", bob.candidate_id),
            ):
                cast = await ballots.cast_ballot(
                    CastBallotInputDto(
                        voter_id=voter_id,
                        selections={president.position_id: choice},
                    )
                )
                assert cast.success is True

            again = await ballots.cast_ballot(
                CastBallotInputDto(
                    voter_id="s1",
                    selections={president.position_id: bob.candidate_id},
                )
            )
            assert again.success is False

            await phase.end_voting()
            status = await phase.get_status()
            assert status.phase == ElectionPhase.ENDED
            assert status.turnout_percentage == 75

            output = await results.execute(GetResultsInputDto())
            assert [r.position_title for r in output.results] == ["President"]
            tallies = output.results[0].tallies
            assert [(t.candidate_name, t.percentage) for t in tallies] == [
                ("Alice", 66.7),
                ("Bob", 33.3),
            ]
            assert output.results[0].winner.candidate_id == alice.candidate_id

            reset = await phase.reset(ResetElectionInputDto(confirmed=True))
            assert reset.success is True
            status = await phase.get_status()
            assert status.phase == ElectionPhase.IDLE
            assert status.registered_count == 0
            assert status.voted_count == 0
            listed = await roster.list_roster()
            assert {c.votes for c in listed.candidates} == {0}
            assert len(listed.candidates) == 2
        finally:
            await container.database.state_store().close()


@pytest.mark.integration
class TestQuizScenario:
    """クイズの自動終了。"""

    @pytest.mark.asyncio
    async def test_quiz_auto_closes_after_grace_period(self, container) -> None:
        """30分のクイズは開始45分後まで実施中、46分後に自動終了する。"""
        started = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)
        now = {"value": started}
        usecase = ManageQuizLifecycleUseCase(
            quiz_repository=container.repositories.quiz_repository(),
            clock=lambda: now["value"],
            grace_period_minutes=15,
        )
        try:
            await usecase.save_assessment(
                SaveAssessmentInputDto(
                    level_id="math-1",
                    title="Fractions",
                    questions=[
                        QuizQuestion.true_false(id="q1", text="1/2 > 1/3", answer=True)
                    ],
                )
            )
            await usecase.launch(QuizActionInputDto(level_id="math-1"))

            now["value"] = started + timedelta(minutes=45)
            assert (await usecase.sweep_expired()).expired_level_ids == []

            now["value"] = started + timedelta(minutes=46)
            assert (await usecase.sweep_expired()).expired_level_ids == ["math-1"]

            listed = await usecase.list_quizzes()
            assert [q.status for q in listed.quizzes] == [QuizStatus.COMPLETED]
        finally:
            await container.database.state_store().close()
