from datetime import datetime
from typing import Iterable, List, Optional

from app.models.transaction import Transaction, TransactionType
from app.utils.dates import to_calendar_date_string, today_string
from app.utils.money import to_fixed

CSV_HEADERS = ["Date", "Type", "Description", "Amount"]
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _row(transaction: Transaction) -> str:
    return ",".join([
        to_calendar_date_string(transaction.date),
        TransactionType(transaction.type).value,
        _quote(transaction.description),
        to_fixed(transaction.amount),
    ])


def export_csv(transactions: Iterable[Transaction]) -> Optional[str]:
    """
    Render transactions as CSV text, keeping their order.

    Returns None for an empty collection so callers can skip the download.
    Only the description is quoted; embedded newlines are left inside the quotes.
    """
    rows: List[str] = [_row(t) for t in transactions]
    if not rows:
        return None
    return "\n".join([",".join(CSV_HEADERS)] + rows)


def export_filename(now: Optional[datetime] = None) -> str:
    return f"transactions_{today_string(now)}.csv"
