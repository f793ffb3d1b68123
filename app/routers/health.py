"""
Health Check Router
Liveness plus storage and advisor status
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Request

from app.core.config import settings
from app.core.deps import get_advisor
from app.utils.advisor import FinancialAdvisor

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/status")
def services_status(request: Request, advisor: FinancialAdvisor = Depends(get_advisor)):
    """
    Check the blob store backend and whether advice is configured.
    A missing API key is a supported state, so it does not degrade the status.
    """
    status = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {},
    }

    blob_store = request.app.state.blob_store
    try:
        storage_status = blob_store.describe()
    except Exception as e:
        logger.error(f"Storage check failed: {str(e)}")
        storage_status = {"status": "error", "error": str(e)}
    storage_status["transactions"] = len(request.app.state.store)
    status["services"]["storage"] = storage_status

    status["services"]["advisor"] = {
        "configured": advisor.configured,
        "model": advisor.model,
    }

    status["overall_status"] = "healthy" if storage_status.get("status") == "accessible" else "degraded"
    return status
