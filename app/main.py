from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from app.core.config import settings
from app.db.blob_store import BlobStore, build_blob_store
from app.db.transaction_store import TransactionStore
from app.routers import advice, export, health, summary, transactions
from app.utils.advisor import AdviceSession, FinancialAdvisor
from app.utils.analyzer import FinanceAnalyzer

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {settings.PROJECT_NAME} with {len(app.state.store)} transactions "
        f"(storage={type(app.state.blob_store).__name__}, advice configured={app.state.advisor.configured})"
    )
    yield
    logger.info("Shutting down")


def create_app(
    blob_store: Optional[BlobStore] = None,
    advisor: Optional[FinancialAdvisor] = None,
) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    app.state.blob_store = blob_store if blob_store is not None else build_blob_store(settings)
    app.state.store = TransactionStore(app.state.blob_store, key=settings.STORAGE_KEY)
    app.state.analyzer = FinanceAnalyzer()
    app.state.advisor = advisor or FinancialAdvisor(
        settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        recent_limit=settings.ADVICE_RECENT_LIMIT,
    )
    app.state.advice_session = AdviceSession(app.state.advisor)
    # Any add/delete makes the displayed advice stale
    app.state.store.subscribe(app.state.advice_session.invalidate)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
        max_age=3600,
    )

    # Root endpoint
    @app.get("/")
    def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME} API"}

    # Register routers
    app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
    app.include_router(transactions.router, prefix=f"{settings.API_PREFIX}/transactions", tags=["Transactions"])
    app.include_router(summary.router, prefix=f"{settings.API_PREFIX}/summary", tags=["Summary"])
    app.include_router(export.router, prefix=f"{settings.API_PREFIX}/export", tags=["Export"])
    app.include_router(advice.router, prefix=f"{settings.API_PREFIX}/advice", tags=["Advice"])

    return app


app = create_app()
