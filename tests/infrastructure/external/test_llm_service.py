"""Tests for LLM service."""

import json

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.domain.services.interfaces.llm_service import (
    ANALYSIS_FAILED_MESSAGE,
    ANALYSIS_UNAVAILABLE_MESSAGE,
)
from src.domain.value_objects.quiz_question import QuestionType
from src.infrastructure.external.llm_service import (
    DEFAULT_MODEL_NAME,
    GeminiLLMService,
    _content_to_text,
)


def _response(content):
    response = MagicMock()
    response.content = content
    return response


class TestGeminiLLMService:
    """Test cases for GeminiLLMService."""

    @pytest.fixture
    def service(self):
        """Create LLM service instance."""
        with patch(
            "src.infrastructure.external.llm_service.ChatGoogleGenerativeAI"
        ) as mock_llm:
            mock_llm.return_value = MagicMock()
            return GeminiLLMService(api_key="test-key")

    @pytest.fixture
    def mock_chain(self):
        """Patch the prompt template so that ``prompt | llm`` returns a mock chain."""
        chain = MagicMock()
        chain.ainvoke = AsyncMock()
        with patch(
            "langchain_core.prompts.ChatPromptTemplate.from_template"
        ) as mock_template:
            mock_template.return_value.__or__ = MagicMock(return_value=chain)
            yield chain

    def test_initialization(self):
        """Test service initialization with different parameters."""
        with patch(
            "src.infrastructure.external.llm_service.ChatGoogleGenerativeAI"
        ) as mock_llm:
            mock_llm.return_value = MagicMock()

            service1 = GeminiLLMService(api_key="key1")
            assert service1.api_key == "key1"
            assert service1.model_name == DEFAULT_MODEL_NAME == "gemini-2.5-flash"

            service2 = GeminiLLMService(api_key="key2", model_name="gemini-1.5-pro")
            assert service2.model_name == "gemini-1.5-pro"
            mock_llm.assert_called_with(
                model="gemini-1.5-pro", google_api_key="key2", temperature=0.2
            )

    @pytest.mark.asyncio
    async def test_generate_quiz(self, service, mock_chain):
        """JSON配列の応答から4択問題が生成されること."""
        mock_chain.ainvoke.return_value = _response(
            json.dumps(
                [
                    {
                        "text": "What is photosynthesis?",
                        "type": "MCQ",
                        "options": ["A", "B", "C", "D"],
                        "correctAnswer": 2,
                        "explanation": "Because C.",
                    },
                    {
                        "text": "Which organelle holds chlorophyll?",
                        "options": ["Nucleus", "Chloroplast", "Ribosome", "Vacuole"],
                        "correctAnswer": 1,
                    },
                ]
            )
        )

        questions = await service.generate_quiz("Photosynthesis", 2)

        assert len(questions) == 2
        assert all(q.type == QuestionType.MCQ for q in questions)
        assert questions[0].correct_answer == 2
        assert questions[0].explanation == "Because C."
        assert questions[1].options[1] == "Chloroplast"
        assert questions[0].id.startswith("q_gen_")
        assert questions[0].id != questions[1].id
        mock_chain.ainvoke.assert_awaited_once_with(
            {"topic": "Photosynthesis", "count": 2}
        )

    @pytest.mark.asyncio
    async def test_generate_quiz_strips_code_fence(self, service, mock_chain):
        body = json.dumps(
            {"questions": [{"text": "Q?", "options": ["a", "b"], "correctAnswer": 0}]}
        )
        mock_chain.ainvoke.return_value = _response(f"```json\n{body}\n```")

        questions = await service.generate_quiz("Anything")

        assert len(questions) == 1

    @pytest.mark.asyncio
    async def test_generate_quiz_skips_malformed_items(self, service, mock_chain):
        mock_chain.ainvoke.return_value = _response(
            json.dumps(
                [
                    {"text": "No options", "correctAnswer": 0},
                    {"text": "Bad index", "options": ["a", "b"], "correctAnswer": 9},
                    {"text": "Good", "options": ["a", "b"], "correctAnswer": 1},
                ]
            )
        )

        questions = await service.generate_quiz("Anything")

        assert [q.text for q in questions] == ["Good"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "not json at all", '"just a string"'])
    async def test_generate_quiz_unusable_response(self, service, mock_chain, content):
        mock_chain.ainvoke.return_value = _response(content)

        assert await service.generate_quiz("Anything") == []

    @pytest.mark.asyncio
    async def test_generate_quiz_failure_returns_empty(self, service, mock_chain):
        """API呼び出しの失敗は例外にせず空リストを返すこと."""
        mock_chain.ainvoke.side_effect = RuntimeError("quota exceeded")

        assert await service.generate_quiz("Anything") == []

    @pytest.mark.asyncio
    async def test_analyze_financial_health(self, service, mock_chain):
        mock_chain.ainvoke.return_value = _response("  Finances look healthy.  ")

        result = await service.analyze_financial_health("Total Income: 10.")

        assert result == "Finances look healthy."
        mock_chain.ainvoke.assert_awaited_once_with({"summary": "Total Income: 10."})

    @pytest.mark.asyncio
    async def test_analyze_financial_health_empty_response(self, service, mock_chain):
        mock_chain.ainvoke.return_value = _response("")

        result = await service.analyze_financial_health("summary")

        assert result == ANALYSIS_UNAVAILABLE_MESSAGE == "Analysis unavailable."

    @pytest.mark.asyncio
    async def test_analyze_financial_health_failure(self, service, mock_chain):
        mock_chain.ainvoke.side_effect = RuntimeError("network down")

        result = await service.analyze_financial_health("summary")

        assert result == ANALYSIS_FAILED_MESSAGE
        assert result == "Unable to generate AI analysis at this time."


class TestContentToText:
    def test_string(self):
        assert _content_to_text("hello") == "hello"

    def test_parts(self):
        parts = ["a", {"type": "text", "text": "b"}, {"type": "image"}]

        assert _content_to_text(parts) == "ab"

    def test_unknown(self):
        assert _content_to_text(None) == ""
