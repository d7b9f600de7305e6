"""クイズ（LMS評価）のライフサイクル管理のユースケース."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from src.application.dtos.quiz_dto import (
    ListQuizzesOutputDto,
    QuizActionInputDto,
    QuizActionOutputDto,
    QuizOutputItem,
    SaveAssessmentInputDto,
    SaveAssessmentOutputDto,
    ScheduleQuizInputDto,
    SubmitQuizInputDto,
    SubmitQuizOutputDto,
    SweepExpiredOutputDto,
)
from src.common.logging import get_logger
from src.domain.entities.quiz import Quiz, QuizStatus
from src.domain.repositories.quiz_repository import QuizRepository
from src.domain.services.quiz_lifecycle_service import (
    QuizAction,
    QuizLifecycleService,
)
from src.domain.services.quiz_scoring_service import QuizScoringService


logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class ManageQuizLifecycleUseCase:
    """クイズの保存・予定登録・実施・終了・自動終了・採点のユースケース.

    現在時刻は ``clock`` から取得する。テストでは固定時刻を返す関数を渡す。
    """

    _SAVEABLE_STATUSES = (QuizStatus.DRAFT, QuizStatus.SCHEDULED)

    def __init__(
        self,
        quiz_repository: QuizRepository,
        lifecycle_service: QuizLifecycleService | None = None,
        scoring_service: QuizScoringService | None = None,
        clock: Callable[[], datetime] = utc_now,
        grace_period_minutes: int | None = None,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            quiz_repository: クイズリポジトリ
            lifecycle_service: 状態遷移サービス（省略時はgrace_period_minutesから作成）
            scoring_service: 採点サービス
            clock: 現在時刻を返す関数
            grace_period_minutes: 自動終了までの猶予（分）
        """
        self.quiz_repository = quiz_repository
        if lifecycle_service is None:
            grace = (
                None
                if grace_period_minutes is None
                else timedelta(minutes=grace_period_minutes)
            )
            lifecycle_service = QuizLifecycleService(grace_period=grace)
        self.lifecycle_service = lifecycle_service
        self.scoring_service = scoring_service or QuizScoringService()
        self.clock = clock

    async def list_quizzes(self) -> ListQuizzesOutputDto:
        """全レベルのクイズを取得する."""
        try:
            quizzes = await self.quiz_repository.get_all()
            return ListQuizzesOutputDto(
                quizzes=[
                    QuizOutputItem.from_entity(level_id, quiz)
                    for level_id, quiz in quizzes.items()
                ]
            )
        except Exception as e:
            logger.error(f"Failed to list quizzes: {e}")
            return ListQuizzesOutputDto(
                quizzes=[], success=False, error_message=str(e)
            )

    async def save_assessment(
        self, input_dto: SaveAssessmentInputDto
    ) -> SaveAssessmentOutputDto:
        """レベルのクイズを保存する（既存のクイズは置き換える）."""
        try:
            title = input_dto.title.strip()
            if not title:
                return SaveAssessmentOutputDto(
                    success=False, error_message="Quiz title must not be blank"
                )
            if not input_dto.questions:
                return SaveAssessmentOutputDto(
                    success=False,
                    error_message="A quiz needs at least one question",
                )
            status = QuizStatus(input_dto.status)
            if status not in self._SAVEABLE_STATUSES:
                return SaveAssessmentOutputDto(
                    success=False,
                    error_message=f"A quiz cannot be saved as {status.value}",
                )
            if input_dto.duration_minutes <= 0:
                return SaveAssessmentOutputDto(
                    success=False, error_message="Duration must be positive"
                )

            existing = await self.quiz_repository.get_by_level(input_dto.level_id)
            quiz_id = (
                input_dto.quiz_id
                or (existing.id if existing else None)
                or f"quiz_{uuid4().hex[:8]}"
            )
            quiz = Quiz(
                title=title,
                questions=input_dto.questions,
                duration_minutes=input_dto.duration_minutes,
                status=status,
                scheduled_date=input_dto.scheduled_date,
                id=quiz_id,
            )
            await self.quiz_repository.save(input_dto.level_id, quiz)
            logger.info(
                "Quiz saved",
                level_id=input_dto.level_id,
                quiz_id=quiz_id,
                questions=len(quiz.questions),
            )
            return SaveAssessmentOutputDto(
                success=True,
                quiz=QuizOutputItem.from_entity(input_dto.level_id, quiz),
            )
        except Exception as e:
            logger.error(f"Failed to save assessment: {e}")
            return SaveAssessmentOutputDto(success=False, error_message=str(e))

    async def schedule(self, input_dto: ScheduleQuizInputDto) -> QuizActionOutputDto:
        """Draftのクイズを予定登録する."""
        return await self._apply(
            input_dto.level_id, QuizAction.SCHEDULE, input_dto.scheduled_date
        )

    async def launch(self, input_dto: QuizActionInputDto) -> QuizActionOutputDto:
        """クイズを開始する（完了済みの場合は再実施）."""
        return await self._apply(input_dto.level_id, QuizAction.LAUNCH)

    async def end(self, input_dto: QuizActionInputDto) -> QuizActionOutputDto:
        """実施中のクイズを終了する."""
        return await self._apply(input_dto.level_id, QuizAction.END)

    async def reset_to_draft(
        self, input_dto: QuizActionInputDto
    ) -> QuizActionOutputDto:
        """クイズを下書きに戻す."""
        return await self._apply(input_dto.level_id, QuizAction.RESET_TO_DRAFT)

    async def delete(self, input_dto: QuizActionInputDto) -> QuizActionOutputDto:
        """レベルのクイズを削除する."""
        try:
            deleted = await self.quiz_repository.delete(input_dto.level_id)
            if not deleted:
                return QuizActionOutputDto(
                    success=False,
                    error_message=f"No quiz for level {input_dto.level_id}",
                )
            logger.info("Quiz deleted", level_id=input_dto.level_id)
            return QuizActionOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to delete quiz: {e}")
            return QuizActionOutputDto(success=False, error_message=str(e))

    async def sweep_expired(self) -> SweepExpiredOutputDto:
        """制限時間と猶予を過ぎた実施中のクイズを完了にする.

        Returns:
            SweepExpiredOutputDto。完了にしたレベルIDの一覧。
        """
        try:
            now = self.clock()
            quizzes = await self.quiz_repository.get_all()
            expired = self.lifecycle_service.expire_overdue(quizzes.values(), now)
            if not expired:
                return SweepExpiredOutputDto()

            expired_ids = {id(q) for q in expired}
            level_ids = [
                level_id
                for level_id, quiz in quizzes.items()
                if id(quiz) in expired_ids
            ]
            await self.quiz_repository.save_many(
                {level_id: quizzes[level_id] for level_id in level_ids}
            )
            logger.info("Expired quizzes completed", level_ids=level_ids)
            return SweepExpiredOutputDto(expired_level_ids=level_ids)
        except Exception as e:
            logger.error(f"Failed to sweep expired quizzes: {e}")
            return SweepExpiredOutputDto(success=False, error_message=str(e))

    async def submit(self, input_dto: SubmitQuizInputDto) -> SubmitQuizOutputDto:
        """回答を採点する（実施中のクイズのみ）."""
        try:
            quiz = await self.quiz_repository.get_by_level(input_dto.level_id)
            if quiz is None:
                return SubmitQuizOutputDto(
                    success=False,
                    error_message=f"No quiz for level {input_dto.level_id}",
                )
            if not quiz.is_active:
                return SubmitQuizOutputDto(
                    success=False,
                    error_message=f"Quiz is not active ({quiz.status.value})",
                )

            result = self.scoring_service.score(quiz, input_dto.answers)
            logger.info(
                "Quiz submitted",
                level_id=input_dto.level_id,
                score=result.score,
            )
            return SubmitQuizOutputDto(
                success=True,
                score=result.score,
                correct_count=result.correct_count,
                total_questions=result.total_questions,
                correct_question_ids=list(result.correct_question_ids),
            )
        except Exception as e:
            logger.error(f"Failed to submit quiz: {e}")
            return SubmitQuizOutputDto(success=False, error_message=str(e))

    async def _apply(
        self,
        level_id: str,
        action: QuizAction,
        scheduled_date: str | None = None,
    ) -> QuizActionOutputDto:
        try:
            quiz = await self.quiz_repository.get_by_level(level_id)
            if quiz is None:
                return QuizActionOutputDto(
                    success=False, error_message=f"No quiz for level {level_id}"
                )

            transition = self.lifecycle_service.apply(
                quiz, action, self.clock(), scheduled_date
            )
            if not transition.applied:
                return QuizActionOutputDto(
                    success=False,
                    status=transition.from_status,
                    error_message=transition.reason,
                )

            await self.quiz_repository.save(level_id, quiz)
            logger.info(
                "Quiz status changed",
                level_id=level_id,
                action=action.value,
                from_status=transition.from_status.value,
                to_status=transition.to_status.value,
            )
            return QuizActionOutputDto(
                success=True,
                status=transition.to_status,
                previous_status=transition.from_status,
            )
        except Exception as e:
            logger.error(f"Failed to {action.value} quiz: {e}")
            return QuizActionOutputDto(success=False, error_message=str(e))
