import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_store
from app.db.transaction_store import TransactionStore
from app.models.transaction import Transaction, TransactionCreate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[Transaction])
def list_transactions(store: TransactionStore = Depends(get_store)):
    """All transactions, newest first."""
    return store.all()


@router.post("/", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate, store: TransactionStore = Depends(get_store)):
    transaction = store.add(payload.type, payload.amount, payload.description, payload.date)
    if transaction is None:
        raise HTTPException(status_code=422, detail="Transaction rejected")
    return transaction


@router.get("/{transaction_id}", response_model=Transaction)
def get_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)):
    transaction = store.get(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)):
    # Deleting an unknown id is a no-op
    if not store.delete(transaction_id):
        logger.info(f"Delete ignored, no transaction {transaction_id}")
    return None
