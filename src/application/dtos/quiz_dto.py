"""クイズ（LMS評価）に関するDTO.

このモジュールはクイズの保存・状態操作・自動終了・採点・AI生成のDTOを定義します。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.quiz import Quiz, QuizStatus
from src.domain.value_objects.quiz_question import QuizQuestion


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class SaveAssessmentInputDto:
    """クイズ保存の入力DTO.

    タイトルと1問以上の設問が必要。既存のクイズは置き換える。
    """

    level_id: str
    title: str
    questions: list[QuizQuestion]
    duration_minutes: int = Quiz.DEFAULT_DURATION_MINUTES
    status: QuizStatus = QuizStatus.SCHEDULED
    scheduled_date: str | None = None
    quiz_id: str | None = None


@dataclass
class QuizActionInputDto:
    """launch / end / reset_to_draft / delete の入力DTO."""

    level_id: str


@dataclass
class ScheduleQuizInputDto:
    """クイズ予定登録の入力DTO."""

    level_id: str
    scheduled_date: str | None = None


@dataclass
class SubmitQuizInputDto:
    """回答提出の入力DTO."""

    level_id: str
    answers: dict[str, Any]  # question_id -> answer


@dataclass
class GenerateQuizQuestionsInputDto:
    """AIによる設問生成の入力DTO."""

    level_id: str
    topic: str
    count: int = 5


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class QuizOutputItem:
    """クイズの出力アイテム."""

    level_id: str
    id: str
    title: str
    status: QuizStatus
    question_count: int
    duration_minutes: int
    scheduled_date: str | None = None
    started_at: datetime | None = None

    @classmethod
    def from_entity(cls, level_id: str, entity: Quiz) -> "QuizOutputItem":
        return cls(
            level_id=level_id,
            id=entity.id or "",
            title=entity.title,
            status=entity.status,
            question_count=len(entity.questions),
            duration_minutes=entity.duration_minutes,
            scheduled_date=entity.scheduled_date,
            started_at=entity.started_at,
        )


@dataclass
class SaveAssessmentOutputDto:
    """クイズ保存の出力DTO."""

    success: bool
    quiz: QuizOutputItem | None = None
    error_message: str | None = None


@dataclass
class QuizActionOutputDto:
    """クイズ状態操作の出力DTO.

    success=Falseの場合、statusは変更されていない現在の状態（クイズがなければNone）。
    """

    success: bool
    status: QuizStatus | None = None
    previous_status: QuizStatus | None = None
    error_message: str | None = None


@dataclass
class ListQuizzesOutputDto:
    """クイズ一覧の出力DTO."""

    quizzes: list[QuizOutputItem]
    success: bool = True
    error_message: str | None = None


@dataclass
class SweepExpiredOutputDto:
    """自動終了処理の出力DTO."""

    expired_level_ids: list[str] = field(default_factory=list)
    success: bool = True
    error_message: str | None = None


@dataclass
class SubmitQuizOutputDto:
    """回答提出（採点）の出力DTO."""

    success: bool
    score: int = 0
    correct_count: int = 0
    total_questions: int = 0
    correct_question_ids: list[str] = field(default_factory=list)
    error_message: str | None = None


@dataclass
class GenerateQuizQuestionsOutputDto:
    """AIによる設問生成の出力DTO."""

    success: bool
    generated_count: int = 0
    total_questions: int = 0
    error_message: str | None = None
