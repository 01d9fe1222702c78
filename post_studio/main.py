"""FastAPI application: lifecycle, routes, dashboard."""
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from supabase import acreate_client

from post_studio.config import settings
from post_studio.db import create_tables, dispose_db, init_db
from post_studio.routes import drafts_router, suggestions_router
from post_studio.services import DraftStore, WebhookService
from post_studio.session import DraftSession
from post_studio.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


async def create_realtime_client():
    """Supabase client for the change feed, or None when it is not configured or unreachable."""
    if not settings.realtime_enabled:
        logger.warning("realtime_not_configured", hint="Set SUPABASE_URL and SUPABASE_KEY; polling only")
        return None
    try:
        return await acreate_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.warning("realtime_client_init_failed", error=str(e))
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging, DB tables, Realtime, scheduler, draft session. Shutdown: all of them, session first."""
    setup_logging()
    store = DraftStore(init_db())
    try:
        await create_tables()
    except Exception as e:
        logger.warning("create_tables_failed", error=str(e))
    realtime = await create_realtime_client()
    http_client = httpx.AsyncClient(timeout=settings.webhook_timeout_seconds)
    scheduler = AsyncIOScheduler()
    scheduler.start()
    draft_session = DraftSession(WebhookService(http_client), store, scheduler, realtime)
    app.state.draft_store = store
    app.state.draft_session = draft_session
    yield
    await draft_session.close()
    scheduler.shutdown(wait=False)
    await http_client.aclose()
    await dispose_db()


app = FastAPI(
    title="LinkedIn Post Studio",
    description="Request an AI-generated LinkedIn post, watch it arrive, then approve, edit or discard it",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(drafts_router)
app.include_router(suggestions_router)

if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/")
async def dashboard():
    """Serve the dashboard UI."""
    index = STATIC_DIR / "index.html"
    if index.exists():
        return FileResponse(index)
    return {"message": "Dashboard not found. Run from project root so static/ is available."}


@app.get("/health")
async def health():
    return {"status": "ok"}
