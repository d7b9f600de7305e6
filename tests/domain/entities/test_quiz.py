"""Quizエンティティのテスト."""

from datetime import UTC, datetime, timedelta

import pytest

from src.domain.entities import Quiz, QuizStatus
from src.domain.value_objects.quiz_question import QuizQuestion


@pytest.fixture
def question() -> QuizQuestion:
    return QuizQuestion.true_false(id="q1", text="Water boils at 100C", answer=True)


class TestQuiz:
    """Quizのテスト."""

    def test_defaults(self, question) -> None:
        quiz = Quiz(title="Midterm", questions=[question])

        assert quiz.status == QuizStatus.DRAFT
        assert quiz.duration_minutes == 30
        assert quiz.started_at is None
        assert quiz.is_active is False

    @pytest.mark.parametrize("duration", [0, -5])
    def test_non_positive_duration_is_rejected(self, duration) -> None:
        with pytest.raises(ValueError):
            Quiz(title="Midterm", duration_minutes=duration)

    def test_status_accepts_raw_value(self) -> None:
        quiz = Quiz(title="Midterm", status="Active")

        assert quiz.status == QuizStatus.ACTIVE
        assert quiz.is_active is True

    def test_deadline(self) -> None:
        started = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        quiz = Quiz(title="Midterm", duration_minutes=30, started_at=started)

        assert quiz.deadline(timedelta(minutes=15)) == started + timedelta(minutes=45)

    def test_deadline_without_start(self) -> None:
        assert Quiz(title="Midterm").deadline(timedelta(minutes=15)) is None

    def test_activate_and_reset_to_draft(self) -> None:
        now = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        quiz = Quiz(title="Midterm")

        quiz.activate(now)
        assert quiz.status == QuizStatus.ACTIVE
        assert quiz.started_at == now

        quiz.reset_to_draft()
        assert quiz.status == QuizStatus.DRAFT
        assert quiz.started_at is None

    def test_schedule_keeps_existing_date_when_omitted(self) -> None:
        quiz = Quiz(title="Midterm", scheduled_date="2026-03-10")

        quiz.schedule()

        assert quiz.status == QuizStatus.SCHEDULED
        assert quiz.scheduled_date == "2026-03-10"

    def test_add_questions_appends(self, question) -> None:
        quiz = Quiz(title="Midterm", questions=[question])
        extra = QuizQuestion.short_answer(
            id="q2", text="Capital of Kenya", answer="Nairobi"
        )

        quiz.add_questions([extra])

        assert [q.id for q in quiz.questions] == ["q1", "q2"]
