from __future__ import annotations

from typing import Iterable, List

from app.models.transaction import (
    ChartSlice,
    FinancialSummary,
    SpendingDistribution,
    Transaction,
    TransactionType,
)


class FinanceAnalyzer:
    """
    Stateless helpers deriving totals and chart data from the transaction
    collection. Nothing is cached; every call recomputes from its input.
    """

    def _total(self, transactions: Iterable[Transaction], kind: TransactionType) -> float:
        return sum((float(t.amount) for t in transactions if t.type == kind), 0.0)

    def total_income(self, transactions: Iterable[Transaction]) -> float:
        return self._total(transactions, TransactionType.INCOME)

    def total_expenses(self, transactions: Iterable[Transaction]) -> float:
        return self._total(transactions, TransactionType.EXPENSE)

    def summarize(self, transactions: Iterable[Transaction]) -> FinancialSummary:
        items: List[Transaction] = list(transactions)
        if not items:
            return FinancialSummary(total_income=0.0, total_expenses=0.0, savings=0.0)

        total_income = self.total_income(items)
        total_expenses = self.total_expenses(items)
        return FinancialSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            savings=total_income - total_expenses,
        )

    def distribution(self, summary: FinancialSummary) -> SpendingDistribution:
        """
        Split income into expense and savings wedges.

        Only the savings wedge is clamped at zero; ``summary.savings`` keeps its
        sign and an overspend is reported separately as ``deficit``.
        """
        slices = [
            ChartSlice(name="Expenses", value=summary.total_expenses),
            ChartSlice(name="Savings", value=max(0.0, summary.savings)),
        ]
        has_data = not (summary.total_income == 0 and summary.total_expenses == 0)
        deficit = abs(summary.savings) if summary.savings < 0 else None

        expense_share = 0.0
        savings_share = 0.0
        if summary.total_income > 0:
            expense_share = min(summary.total_expenses / summary.total_income * 100, 100.0)
            savings_share = max(summary.savings / summary.total_income * 100, 0.0)

        return SpendingDistribution(
            has_data=has_data,
            slices=slices,
            deficit=deficit,
            expense_share=round(expense_share, 2),
            savings_share=round(savings_share, 2),
        )
