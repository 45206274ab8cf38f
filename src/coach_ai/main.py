"""FastAPI application hosting the coach functions."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_database, get_optional_gateway, get_reminder_scheduler
from .api.exception_handlers import register_exception_handlers
from .api.routes import coach, push, service_worker, vision, voice, workouts
from .config import Settings, get_settings
from .db import DatabaseAdapter
from .llm.gateway import AIGatewayClient
from .services.reminder_scheduler import ReminderScheduler
from .utils.log_sanitizer import install_log_sanitizer

# Must run before any logging happens
install_log_sanitizer()

logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "/functions/v1"

# Headers the app's Supabase client sends
CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def check_configuration(settings: Settings) -> None:
    """Log which integrations are usable; nothing here is fatal."""
    if not settings.ai_gateway_api_key:
        logger.warning("LOVABLE_API_KEY is not configured. Routine generation, chat and vision will fail.")
    if not settings.supabase_jwt_secret:
        logger.warning("SUPABASE_JWT_SECRET is not configured. Authenticated functions will answer 401.")
    if not settings.supabase_service_key:
        logger.warning("SUPABASE_SERVICE_KEY is not configured. send-push and the reminder cron will answer 401.")
    if not settings.elevenlabs_api_key:
        logger.warning("ELEVENLABS_API_KEY is not configured. Voice functions will fail.")
    if not settings.vapid_private_key:
        logger.warning("VAPID keys are not configured. Push notifications will fail.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"Starting Coach AI v{__version__} ({settings.database_backend} backend)")
    check_configuration(settings)

    scheduler = None
    if settings.reminder_scheduler_enabled:
        try:
            scheduler = get_reminder_scheduler()
            scheduler.start()
        except Exception as e:
            logger.warning(f"Failed to start reminder scheduler: {e}")
            scheduler = None
    else:
        logger.info("In-process reminder scheduler is disabled")

    yield

    logger.info("Shutting down Coach AI")
    if scheduler is not None:
        scheduler.stop()


app = FastAPI(
    title="Coach AI",
    description="AI personal trainer: routines, chat coach, voice, form analysis and reminders",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=CORS_HEADERS,
)

register_exception_handlers(app)

app.include_router(workouts.router, prefix=FUNCTIONS_PREFIX, tags=["routines"])
app.include_router(coach.router, prefix=FUNCTIONS_PREFIX, tags=["coach"])
app.include_router(vision.router, prefix=FUNCTIONS_PREFIX, tags=["vision"])
app.include_router(voice.router, prefix=FUNCTIONS_PREFIX, tags=["voice"])
app.include_router(push.router, prefix=FUNCTIONS_PREFIX, tags=["push"])
app.include_router(service_worker.router)


@app.get("/")
async def root():
    return {
        "name": "Coach AI",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health(
    database: DatabaseAdapter = Depends(get_database),
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
    gateway: Optional[AIGatewayClient] = Depends(get_optional_gateway),
):
    """Database, reminder scheduler and AI gateway status."""
    db_status = database.health_check()
    gateway_status = {"configured": gateway is not None}
    if gateway is not None:
        gateway_status.update(gateway.get_metrics())
    return {
        "status": "healthy" if db_status["healthy"] else "degraded",
        "database": db_status,
        "scheduler": scheduler.get_status(),
        "ai_gateway": gateway_status,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
