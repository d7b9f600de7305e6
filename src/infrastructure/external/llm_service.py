"""Gemini LLM service implementation.

LangChainの ``ChatGoogleGenerativeAI`` を使ってクイズ生成と会計分析を行う。
失敗は呼び出し元に伝播させず、空リスト・定型メッセージに縮退する。
"""

import json
import re

from typing import Any
from uuid import uuid4

from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from src.common.logging import get_logger
from src.domain.services.interfaces.llm_service import (
    ANALYSIS_FAILED_MESSAGE,
    ANALYSIS_UNAVAILABLE_MESSAGE,
    QUIZ_GENERATION_DEFAULT_COUNT,
)
from src.domain.value_objects.quiz_question import QuizQuestion
from src.infrastructure.exceptions import LLMError


logger = get_logger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"

QUIZ_GENERATION_PROMPT = """Create a multiple choice quiz about "{topic}" with {count} \
questions suitable for university level students.

Respond with a JSON array only. Each element is an object with these fields:
- "text": the question text
- "type": always "MCQ"
- "options": an array of exactly 4 answer options
- "correctAnswer": the index (0-3) of the correct option
- "explanation": a brief explanation of the answer
"""

FINANCIAL_ANALYSIS_PROMPT = """Act as a financial analyst for Baobab Institute. \
Analyze the following transaction summary and give a brief, 1-paragraph strategic \
insight on financial health: {summary}"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)


class GeminiLLMService:
    """Google Gemini を使ったLLMサービス."""

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str = DEFAULT_MODEL_NAME,
        temperature: float = 0.2,
    ):
        """Initialize Gemini LLM service.

        Args:
            api_key: Google APIキー
            model_name: 使用するモデル名
            temperature: 生成の温度
        """
        self.api_key = api_key
        self.model_name = model_name
        self._llm = ChatGoogleGenerativeAI(
            model=model_name,
            google_api_key=api_key,
            temperature=temperature,
        )

    async def _invoke(self, template: str, variables: dict[str, Any]) -> str:
        prompt = ChatPromptTemplate.from_template(template)
        chain = prompt | self._llm
        try:
            response = await chain.ainvoke(variables)
        except Exception as e:
            raise LLMError(
                "Gemini request failed", {"model": self.model_name, "error": str(e)}
            ) from e
        return _content_to_text(getattr(response, "content", response))

    async def generate_quiz(
        self, topic: str, count: int = QUIZ_GENERATION_DEFAULT_COUNT
    ) -> list[QuizQuestion]:
        """トピックに関する4択問題を生成する.

        Args:
            topic: 出題トピック
            count: 生成する問題数

        Returns:
            生成された設問。失敗時は空リスト。
        """
        try:
            text = await self._invoke(
                QUIZ_GENERATION_PROMPT, {"topic": topic, "count": count}
            )
        except LLMError as e:
            logger.error("Gemini quiz generation error", topic=topic, error=str(e))
            return []

        if not text.strip():
            return []

        try:
            payload = json.loads(_CODE_FENCE.sub("", text.strip()))
        except json.JSONDecodeError as e:
            logger.error("Gemini returned non-JSON quiz", topic=topic, error=str(e))
            return []

        if isinstance(payload, dict):
            payload = payload.get("questions", [])
        if not isinstance(payload, list):
            return []

        questions = []
        for item in payload:
            question = self._to_question(item)
            if question is not None:
                questions.append(question)

        logger.info(
            "Generated quiz questions",
            topic=topic,
            requested=count,
            generated=len(questions),
        )
        return questions

    def _to_question(self, item: Any) -> QuizQuestion | None:
        try:
            return QuizQuestion.multiple_choice(
                id=f"q_gen_{uuid4().hex[:12]}",
                text=str(item["text"]),
                options=[str(o) for o in item["options"]],
                correct_index=int(item["correctAnswer"]),
                explanation=item.get("explanation") or None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Skipping malformed generated question", error=str(e))
            return None

    async def analyze_financial_health(self, data_summary: str) -> str:
        """会計サマリーから戦略的な所見を1段落で生成する."""
        try:
            text = await self._invoke(
                FINANCIAL_ANALYSIS_PROMPT, {"summary": data_summary}
            )
        except LLMError as e:
            logger.error("Gemini analysis error", error=str(e))
            return ANALYSIS_FAILED_MESSAGE
        return text.strip() or ANALYSIS_UNAVAILABLE_MESSAGE


def _content_to_text(content: Any) -> str:
    """LangChainのメッセージcontent（文字列またはパーツのリスト）を文字列にする."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return ""
