"""実施中クイズの自動終了を定期実行するバックグラウンドサービス."""

import asyncio

from src.application.dtos.quiz_dto import SweepExpiredOutputDto
from src.application.usecases.manage_quiz_lifecycle_usecase import (
    ManageQuizLifecycleUseCase,
)
from src.common.logging import get_logger


logger = get_logger(__name__)


class QuizExpirySweeper:
    """一定間隔で ``sweep_expired`` を呼び出すループ.

    1回の処理が失敗してもログに残してループを継続する。
    ``stop_event`` がセットされると次の待機中に終了する。
    """

    def __init__(
        self,
        quiz_lifecycle_usecase: ManageQuizLifecycleUseCase,
        interval_seconds: float = 60,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.quiz_lifecycle_usecase = quiz_lifecycle_usecase
        self.interval_seconds = interval_seconds

    async def run_once(self) -> SweepExpiredOutputDto:
        """1回分の自動終了処理を実行する."""
        result = await self.quiz_lifecycle_usecase.sweep_expired()
        if not result.success:
            logger.warning("Quiz sweep failed", error=result.error_message)
        elif result.expired_level_ids:
            logger.info("Quiz sweep completed", expired=result.expired_level_ids)
        return result

    async def run(self, stop_event: asyncio.Event) -> int:
        """停止されるまで定期的に自動終了処理を実行する.

        Returns:
            実行した回数
        """
        passes = 0
        logger.info("Quiz sweeper started", interval_seconds=self.interval_seconds)
        while not stop_event.is_set():
            try:
                await self.run_once()
            except Exception:
                logger.exception("Quiz sweep pass raised")
            passes += 1
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except TimeoutError:
                continue
        logger.info("Quiz sweeper stopped", passes=passes)
        return passes
