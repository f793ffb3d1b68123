from fastapi import Request

from app.db.transaction_store import TransactionStore
from app.utils.advisor import AdviceSession, FinancialAdvisor
from app.utils.analyzer import FinanceAnalyzer


def get_store(request: Request) -> TransactionStore:
    return request.app.state.store


def get_analyzer(request: Request) -> FinanceAnalyzer:
    return request.app.state.analyzer


def get_advisor(request: Request) -> FinancialAdvisor:
    return request.app.state.advisor


def get_advice_session(request: Request) -> AdviceSession:
    return request.app.state.advice_session
