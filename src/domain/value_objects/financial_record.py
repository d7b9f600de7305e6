"""会計データの値オブジェクト."""

from dataclasses import dataclass
from enum import Enum


class TransactionType(str, Enum):
    """取引種別."""

    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class FinancialRecord:
    """収入・支出の1取引."""

    id: str
    type: TransactionType
    category: str
    amount: float
    date: str
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", TransactionType(self.type))


@dataclass(frozen=True)
class InventoryItem:
    """在庫品目."""

    id: str
    name: str
    quantity: int
    unit_price: float
    category: str = "General"

    @property
    def value(self) -> float:
        return self.quantity * self.unit_price
