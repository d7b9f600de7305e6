"""会計データのAI分析のユースケース."""

from src.application.dtos.financial_analysis_dto import (
    AnalyzeFinancialHealthInputDto,
    AnalyzeFinancialHealthOutputDto,
)
from src.common.logging import get_logger
from src.domain.services.financial_summary_service import FinancialSummaryService
from src.domain.services.interfaces.llm_service import (
    ANALYSIS_FAILED_MESSAGE,
    ILLMService,
)


logger = get_logger(__name__)


class AnalyzeFinancialHealthUseCase:
    """取引・在庫のサマリーを作成し、LLMに分析させるユースケース."""

    def __init__(
        self,
        llm_service: ILLMService,
        summary_service: FinancialSummaryService | None = None,
    ) -> None:
        self.llm_service = llm_service
        self.summary_service = summary_service or FinancialSummaryService()

    async def execute(
        self, input_dto: AnalyzeFinancialHealthInputDto
    ) -> AnalyzeFinancialHealthOutputDto:
        summary = ""
        try:
            summary = self.summary_service.build_summary(
                input_dto.records, input_dto.inventory
            )
            analysis = await self.llm_service.analyze_financial_health(summary)
            return AnalyzeFinancialHealthOutputDto(summary=summary, analysis=analysis)
        except Exception as e:
            logger.error(f"Failed to analyze financial health: {e}")
            return AnalyzeFinancialHealthOutputDto(
                summary=summary,
                analysis=ANALYSIS_FAILED_MESSAGE,
                success=False,
                error_message=str(e),
            )
