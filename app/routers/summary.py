from fastapi import APIRouter, Depends

from app.core.deps import get_analyzer, get_store
from app.db.transaction_store import TransactionStore
from app.models.transaction import FinancialSummary, SpendingDistribution
from app.utils.analyzer import FinanceAnalyzer

router = APIRouter()


@router.get("/", response_model=FinancialSummary)
def get_summary(
    store: TransactionStore = Depends(get_store),
    analyzer: FinanceAnalyzer = Depends(get_analyzer),
):
    return analyzer.summarize(store.all())


@router.get("/distribution", response_model=SpendingDistribution)
def get_distribution(
    store: TransactionStore = Depends(get_store),
    analyzer: FinanceAnalyzer = Depends(get_analyzer),
):
    """
    Expenses vs. savings wedges for the chart, plus income utilization shares.
    """
    return analyzer.distribution(analyzer.summarize(store.all()))
