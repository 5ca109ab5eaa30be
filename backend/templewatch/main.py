"""
FastAPI app entrypoint.

Primary: GET /poll, hit by an external cron. Optional in-process scheduler when POLL_INTERVAL_SECONDS > 0.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from templewatch.api.routes import auth, availability, poll
from templewatch.config import settings
from templewatch.core.constants import SLOT_POLL_JOB_ID
from templewatch.orchestrator.orchestrator import PollOrchestrator
from templewatch.scheduler.poll_job import run_poll_job
from templewatch.services.auth.token_store import TokenStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = None
    if settings.poll_interval_seconds > 0:
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            run_poll_job,
            "interval",
            seconds=settings.poll_interval_seconds,
            id=SLOT_POLL_JOB_ID,
            args=[app.state.orchestrator],
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        logger.info("Slot poll scheduled every %ss", settings.poll_interval_seconds)
    else:
        logger.info("In-process polling disabled (POLL_INTERVAL_SECONDS=0); waiting for GET /poll")
    app.state.scheduler = scheduler
    if not settings.slack_webhook_url:
        logger.warning("SLACK_WEBHOOK_URL not set; changes will be detected but not delivered")
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Temple Slot Watch", version="0.1.0", lifespan=lifespan)
app.state.orchestrator = PollOrchestrator(tokens=TokenStore())

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for a deployed dashboard
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
_cors_extra = settings.cors_origins or os.getenv("CORS_ORIGINS", "")
if _cors_extra:
    _cors_origins.extend(o.strip() for o in _cors_extra.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(availability.router, tags=["availability"])
app.include_router(poll.router, tags=["poll"])
app.include_router(auth.router, prefix="/auth", tags=["auth"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Temple Slot Watch API", "docs": "/docs", "health": "/health", "poll": "/poll"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
