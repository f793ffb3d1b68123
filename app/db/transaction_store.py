import json
import logging
import math
import threading
from datetime import date
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.db.blob_store import BlobStore
from app.models.transaction import MAX_AMOUNT, Transaction, TransactionType
from app.utils.dates import parse_instant, to_instant, to_iso

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "transactions"

_transaction_list = TypeAdapter(List[Transaction])


def _newest_first(transactions: List[Transaction]) -> List[Transaction]:
    # sort() is stable, so earlier entries lead among equal dates
    return sorted(transactions, key=lambda t: parse_instant(t.date), reverse=True)


class TransactionStore:
    """
    Owns the transaction collection and keeps it sorted by date, newest first.

    The whole collection is written to the blob store after every successful
    add or delete, and read back once on construction. Mutations are
    serialized with a lock since routes run in a threadpool.
    """

    def __init__(self, blob_store: BlobStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._blob_store = blob_store
        self._key = key
        self._lock = threading.Lock()
        self._listeners: List[Callable[[], None]] = []
        self._transactions: List[Transaction] = self._load()

    def _load(self) -> List[Transaction]:
        try:
            saved = self._blob_store.get(self._key)
            if not saved:
                return []
            loaded = _newest_first(_transaction_list.validate_python(json.loads(saved)))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse saved transactions, starting empty: {e}")
            return []
        logger.info(f"Loaded {len(loaded)} saved transactions")
        return loaded

    def _save(self) -> None:
        payload = json.dumps([t.model_dump(mode="json") for t in self._transactions])
        if not self._blob_store.put(self._key, payload):
            logger.warning(f"Could not persist {len(self._transactions)} transactions")

    def _changed(self) -> None:
        self._save()
        for listener in self._listeners:
            listener()

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after every successful mutation."""
        self._listeners.append(listener)

    def add(
        self,
        type: TransactionType | str,
        amount: float,
        description: str,
        calendar_date: Optional[date],
    ) -> Optional[Transaction]:
        try:
            kind = TransactionType(type)
        except ValueError:
            return None
        if not description or calendar_date is None:
            return None
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return None
        if not math.isfinite(amount) or amount <= 0 or amount > MAX_AMOUNT:
            return None

        instant = to_instant(calendar_date.year, calendar_date.month, calendar_date.day)
        transaction = Transaction(
            type=kind,
            amount=float(amount),
            description=description,
            date=to_iso(instant),
        )

        with self._lock:
            # Newest insertion leads among equal dates
            self._transactions = _newest_first([transaction] + self._transactions)
            logger.info(f"Added {kind.value} transaction {transaction.id} for {transaction.date}")
            self._changed()
        return transaction

    def delete(self, transaction_id: str) -> bool:
        with self._lock:
            remaining = [t for t in self._transactions if t.id != transaction_id]
            if len(remaining) == len(self._transactions):
                return False
            self._transactions = remaining
            logger.info(f"Deleted transaction {transaction_id}")
            self._changed()
        return True

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def all(self) -> List[Transaction]:
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)
