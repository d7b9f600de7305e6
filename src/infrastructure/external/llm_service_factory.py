"""LLM service factory

APIキーの有無に応じてGemini実装または縮退実装を返す。
"""

import logging

from src.domain.services.interfaces.llm_service import ILLMService
from src.infrastructure.external.null_llm_service import NullLLMService


logger = logging.getLogger(__name__)


class LLMServiceFactory:
    """LLM service factory"""

    @staticmethod
    def create(
        api_key: str | None = None, model_name: str | None = None
    ) -> ILLMService:
        """LLMサービスを作成

        Args:
            api_key: Google APIキー（空ならNullLLMService）
            model_name: Geminiのモデル名

        Returns:
            ILLMService: Gemini実装または縮退実装
        """
        if not api_key or not api_key.strip():
            logger.info("GOOGLE_API_KEY is not set; using NullLLMService")
            return NullLLMService()

        # 遅延インポートでAPIキーがない環境の起動を軽くする
        from src.infrastructure.external.llm_service import (
            DEFAULT_MODEL_NAME,
            GeminiLLMService,
        )

        logger.info("Creating Gemini LLM service")
        return GeminiLLMService(
            api_key=api_key, model_name=model_name or DEFAULT_MODEL_NAME
        )
