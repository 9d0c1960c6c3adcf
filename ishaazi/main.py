"""
FastAPI app entrypoint.

Engagement (views, likes, shares, comments) and notifications for the Ishaazi Livestock Services magazine.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware

# Load .env from the repo root before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from ishaazi.api.routes import content, notifications
from ishaazi.config import settings
from ishaazi.core.constants import NOTIFICATION_RETENTION_INTERVAL_HOURS, NOTIFICATION_RETENTION_JOB_ID
from ishaazi.core.errors import IshaaziError, domain_error_to_http
from ishaazi.scheduler.notification_retention_job import run_notification_retention_job

logger = logging.getLogger(__name__)

# Scheduler: prune old notifications every few hours
_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _scheduler.add_job(
        run_notification_retention_job,
        "interval",
        hours=NOTIFICATION_RETENTION_INTERVAL_HOURS,
        id=NOTIFICATION_RETENTION_JOB_ID,
        replace_existing=True,
    )
    _scheduler.start()
    app.state.scheduler = _scheduler
    logger.info(
        "Backend ready; notification retention every %sh (keep %s days)",
        NOTIFICATION_RETENTION_INTERVAL_HOURS,
        settings.notification_retention_days,
    )
    yield
    _scheduler.shutdown(wait=False)


app = FastAPI(title="Ishaazi Livestock Services", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production frontend
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IshaaziError)
async def ishaazi_error_handler(request: Request, exc: IshaaziError):
    if exc.status_code >= 500:
        logger.error("Unhandled service error on %s %s: %s", request.method, request.url.path, exc)
    return await http_exception_handler(request, domain_error_to_http(exc))


app.include_router(content.router, prefix="/api/content", tags=["content"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Ishaazi Livestock Services API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
