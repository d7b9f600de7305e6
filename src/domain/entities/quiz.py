"""Quiz entity."""

from datetime import datetime, timedelta
from enum import Enum

from src.domain.entities.base import BaseEntity
from src.domain.value_objects.quiz_question import QuizQuestion


class QuizStatus(str, Enum):
    """クイズ（評価）のライフサイクル状態."""

    DRAFT = "Draft"
    SCHEDULED = "Scheduled"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class Quiz(BaseEntity):
    """コンピテンシーレベルに紐づく評価クイズ.

    1つのコンピテンシーレベルにつき最大1件。状態遷移の可否は
    QuizLifecycleServiceが判定し、このエンティティは状態の書き換えのみ行う。
    """

    DEFAULT_DURATION_MINUTES = 30

    def __init__(
        self,
        title: str,
        questions: list[QuizQuestion] | None = None,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        status: QuizStatus = QuizStatus.DRAFT,
        scheduled_date: str | None = None,
        started_at: datetime | None = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id)
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        self.title = title
        self.questions = list(questions or [])
        self.duration_minutes = duration_minutes
        self.status = QuizStatus(status)
        self.scheduled_date = scheduled_date
        self.started_at = started_at

    @property
    def is_active(self) -> bool:
        return self.status == QuizStatus.ACTIVE

    def deadline(self, grace: timedelta) -> datetime | None:
        """自動終了の期限（開始時刻 + 制限時間 + 猶予）."""
        if self.started_at is None:
            return None
        return self.started_at + timedelta(minutes=self.duration_minutes) + grace

    def activate(self, now: datetime) -> None:
        self.status = QuizStatus.ACTIVE
        self.started_at = now

    def complete(self) -> None:
        self.status = QuizStatus.COMPLETED

    def schedule(self, scheduled_date: str | None = None) -> None:
        self.status = QuizStatus.SCHEDULED
        if scheduled_date is not None:
            self.scheduled_date = scheduled_date

    def reset_to_draft(self) -> None:
        self.status = QuizStatus.DRAFT
        self.started_at = None

    def add_questions(self, questions: list[QuizQuestion]) -> None:
        self.questions.extend(questions)

    def __str__(self) -> str:
        return f"Quiz(title={self.title}, status={self.status.value})"
