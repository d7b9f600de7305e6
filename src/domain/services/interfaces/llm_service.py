"""LLMサービスのインターフェース."""

from typing import Protocol

from src.domain.value_objects.quiz_question import QuizQuestion


QUIZ_GENERATION_DEFAULT_COUNT = 5
ANALYSIS_UNAVAILABLE_MESSAGE = "Analysis unavailable."
ANALYSIS_FAILED_MESSAGE = "Unable to generate AI analysis at this time."


class ILLMService(Protocol):
    """クイズ生成・会計分析を行うLLMサービスのインターフェース.

    いずれのメソッドも失敗時に例外を送出せず、空リストまたは
    定型メッセージを返す。
    """

    async def generate_quiz(
        self, topic: str, count: int = QUIZ_GENERATION_DEFAULT_COUNT
    ) -> list[QuizQuestion]:
        """トピックに関する4択問題を生成する。失敗時は空リスト."""
        ...

    async def analyze_financial_health(self, data_summary: str) -> str:
        """会計サマリーから1段落の分析を生成する。失敗時は定型メッセージ."""
        ...
