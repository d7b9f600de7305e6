"""会計AI分析に関するDTO."""

from dataclasses import dataclass, field

from src.domain.value_objects.financial_record import FinancialRecord, InventoryItem


@dataclass
class AnalyzeFinancialHealthInputDto:
    """会計分析の入力DTO."""

    records: list[FinancialRecord]
    inventory: list[InventoryItem] = field(default_factory=list)


@dataclass
class AnalyzeFinancialHealthOutputDto:
    """会計分析の出力DTO.

    LLMが利用できない場合もsuccess=Trueで定型メッセージを返す。
    """

    summary: str
    analysis: str
    success: bool = True
    error_message: str | None = None
