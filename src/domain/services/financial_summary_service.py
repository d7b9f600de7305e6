"""AI分析に渡す会計サマリーを作成するドメインサービス."""

from collections.abc import Sequence

from src.domain.value_objects.financial_record import (
    FinancialRecord,
    InventoryItem,
    TransactionType,
)


class FinancialSummaryService:
    """取引と在庫から1行の会計サマリー文字列を組み立てる."""

    def total(
        self, records: Sequence[FinancialRecord], type_: TransactionType
    ) -> float:
        return sum(r.amount for r in records if r.type == type_)

    def top_expense_category(self, records: Sequence[FinancialRecord]) -> str:
        """金額が最大の支出のカテゴリ。支出がなければ "None"."""
        expenses = [r for r in records if r.type == TransactionType.EXPENSE]
        if not expenses:
            return "None"
        return max(expenses, key=lambda r: r.amount).category

    def build_summary(
        self,
        records: Sequence[FinancialRecord],
        inventory: Sequence[InventoryItem] = (),
    ) -> str:
        income = self.total(records, TransactionType.INCOME)
        expense = self.total(records, TransactionType.EXPENSE)
        inventory_value = sum(item.value for item in inventory)
        return (
            f"Total Income: {_fmt(income)}. "
            f"Total Expense: {_fmt(expense)}. "
            f"Net: {_fmt(income - expense)}. "
            f"Top Expense Category: {self.top_expense_category(records)}. "
            f"Inventory Value: {_fmt(inventory_value)}."
        )


def _fmt(amount: float) -> str:
    # 整数値は小数点なしで表示する（例: 1500.0 → "1500"）
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"
