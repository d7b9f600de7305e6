"""LLMを使わない縮退用のLLMサービス."""

from src.common.logging import get_logger
from src.domain.services.interfaces.llm_service import (
    ANALYSIS_UNAVAILABLE_MESSAGE,
    QUIZ_GENERATION_DEFAULT_COUNT,
)
from src.domain.value_objects.quiz_question import QuizQuestion


logger = get_logger(__name__)


class NullLLMService:
    """APIキー未設定時に使う実装。常に空の結果を返す."""

    async def generate_quiz(
        self, topic: str, count: int = QUIZ_GENERATION_DEFAULT_COUNT
    ) -> list[QuizQuestion]:
        logger.info("LLM is not configured; skipping quiz generation", topic=topic)
        return []

    async def analyze_financial_health(self, data_summary: str) -> str:
        logger.info("LLM is not configured; skipping financial analysis")
        return ANALYSIS_UNAVAILABLE_MESSAGE
