"""JobQuote Backend: FastAPI application.

Serves the hosted estimation endpoint and the tradesperson app API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobquote.config import get_settings
from jobquote.models.database import dispose_db, init_db
from jobquote.routers import (
    approvals_router, auth_router, clients_router, estimate_router,
    invoices_router, quotes_router,
)
from jobquote.services.catalog import load_catalog

# ─── LOGGING ─────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-25s | %(levelname)-7s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("jobquote")


# ─── APP LIFECYCLE ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()

    # A bad catalog file fails startup rather than individual requests
    app.state.catalog = load_catalog(settings.catalog_path)
    logger.info(f"Trade catalog loaded: {len(app.state.catalog)} trades")

    logger.info("Initializing database...")
    await init_db()
    logger.info("Database ready")

    yield

    await dispose_db()
    logger.info("Database connections closed")


# ─── APP ─────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="JobQuote API",
    description=(
        "Instant job quotes for sole traders. Classifies a free-text job "
        "description, estimates labour and materials, and manages clients, "
        "quotes, customer approvals and invoices."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow app and web frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(estimate_router)
app.include_router(auth_router, prefix="/api/v1")
app.include_router(clients_router, prefix="/api/v1")
app.include_router(quotes_router, prefix="/api/v1")
app.include_router(approvals_router, prefix="/api/v1")
app.include_router(invoices_router, prefix="/api/v1")


# ─── HEALTH CHECK ────────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    s = get_settings()
    db = s.database_url
    return {
        "status": "ok",
        "service": "jobquote-api",
        "version": "1.0.0",
        "env": s.app_env,
        "db_type": "postgres" if "postgres" in db else "sqlite",
        "email": "resend" if s.resend_api_key else ("smtp" if s.smtp_user else "disabled"),
    }


@app.get("/")
async def root():
    return {
        "name": "JobQuote API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
