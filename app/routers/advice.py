"""
Advice Router
Requests, shows and dismisses AI budgeting advice
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_advice_session, get_analyzer, get_store
from app.db.transaction_store import TransactionStore
from app.models.transaction import AdviceResponse
from app.utils.advisor import AdviceInFlightError, AdviceSession
from app.utils.analyzer import FinanceAnalyzer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=AdviceResponse)
def get_advice(session: AdviceSession = Depends(get_advice_session)):
    return AdviceResponse(advice=session.advice, in_flight=session.in_flight)


@router.post("/", response_model=AdviceResponse)
async def request_advice(
    store: TransactionStore = Depends(get_store),
    analyzer: FinanceAnalyzer = Depends(get_analyzer),
    session: AdviceSession = Depends(get_advice_session),
):
    transactions = store.all()
    if not transactions:
        raise HTTPException(status_code=400, detail="Add transactions before requesting advice")

    try:
        advice = await session.request(analyzer.summarize(transactions), transactions)
    except AdviceInFlightError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return AdviceResponse(advice=advice, in_flight=False)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_advice(session: AdviceSession = Depends(get_advice_session)):
    session.dismiss()
    return None
