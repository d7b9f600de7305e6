"""クイズのライフサイクル（状態遷移・自動終了判定）のドメインサービス."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import ClassVar

from src.domain.entities.quiz import Quiz, QuizStatus


class QuizAction(str, Enum):
    """講師が実行するクイズ操作."""

    SCHEDULE = "schedule"
    LAUNCH = "launch"
    END = "end"
    RESET_TO_DRAFT = "reset_to_draft"


@dataclass(frozen=True)
class QuizTransition:
    """遷移の適用結果."""

    action: QuizAction
    from_status: QuizStatus
    to_status: QuizStatus
    applied: bool
    reason: str | None = None


class QuizLifecycleService:
    """Draft → Scheduled → Active → Completed の遷移を判定・適用する.

    Completed → Active は明示的な再実施（LAUNCH）としてのみ許可される。
    """

    DEFAULT_GRACE_PERIOD: ClassVar[timedelta] = timedelta(minutes=15)

    ALLOWED_SOURCES: ClassVar[dict[QuizAction, frozenset[QuizStatus]]] = {
        QuizAction.SCHEDULE: frozenset({QuizStatus.DRAFT}),
        QuizAction.LAUNCH: frozenset(
            {QuizStatus.DRAFT, QuizStatus.SCHEDULED, QuizStatus.COMPLETED}
        ),
        QuizAction.END: frozenset({QuizStatus.ACTIVE}),
        QuizAction.RESET_TO_DRAFT: frozenset(QuizStatus),
    }

    def __init__(self, grace_period: timedelta | None = None) -> None:
        self.grace_period = (
            self.DEFAULT_GRACE_PERIOD if grace_period is None else grace_period
        )

    def can_apply(self, quiz: Quiz, action: QuizAction) -> bool:
        return quiz.status in self.ALLOWED_SOURCES[action]

    def apply(
        self,
        quiz: Quiz,
        action: QuizAction,
        now: datetime,
        scheduled_date: str | None = None,
    ) -> QuizTransition:
        """操作を適用する。許可されない場合はクイズを変更しない.

        Args:
            quiz: 対象クイズ（許可された場合はその場で書き換える）
            action: 操作
            now: 現在時刻（LAUNCHの開始時刻に使用）
            scheduled_date: SCHEDULE時の実施予定日

        Returns:
            QuizTransition
        """
        before = quiz.status
        if not self.can_apply(quiz, action):
            return QuizTransition(
                action=action,
                from_status=before,
                to_status=before,
                applied=False,
                reason=f"Cannot {action.value} a quiz that is {before.value}",
            )

        if action == QuizAction.SCHEDULE:
            quiz.schedule(scheduled_date)
        elif action == QuizAction.LAUNCH:
            quiz.activate(now)
        elif action == QuizAction.END:
            quiz.complete()
        else:
            quiz.reset_to_draft()

        return QuizTransition(
            action=action, from_status=before, to_status=quiz.status, applied=True
        )

    def is_expired(self, quiz: Quiz, now: datetime) -> bool:
        """実施中のクイズが制限時間＋猶予を過ぎているか."""
        if not quiz.is_active:
            return False
        deadline = quiz.deadline(self.grace_period)
        return deadline is not None and now > deadline

    def expire_overdue(self, quizzes: Iterable[Quiz], now: datetime) -> list[Quiz]:
        """期限切れの実施中クイズを完了にし、変更したクイズを返す."""
        expired = []
        for quiz in quizzes:
            if self.is_expired(quiz, now):
                quiz.complete()
                expired.append(quiz)
        return expired
