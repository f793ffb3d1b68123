import logging

from fastapi import APIRouter, Depends, Response, status

from app.core.deps import get_store
from app.db.transaction_store import TransactionStore
from app.utils.csv_export import CSV_MEDIA_TYPE, export_csv, export_filename

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/csv")
def download_csv(store: TransactionStore = Depends(get_store)):
    """
    Download all transactions as ``transactions_<YYYY-MM-DD>.csv``.
    Returns 204 with no body when there is nothing to export.
    """
    content = export_csv(store.all())
    if content is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    filename = export_filename()
    logger.info(f"Exporting {len(store)} transactions to {filename}")
    return Response(
        content=content.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
