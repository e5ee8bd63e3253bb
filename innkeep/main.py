"""Innkeep – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from innkeep.config import get_settings
from innkeep.database import Base, SessionLocal, engine
from innkeep.errors import ServiceError, http_status_for
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from innkeep.models import (  # noqa: F401
    PropertyOwner, Property, RoomType, Room, Guest, Reservation,
    Staff, User, HousekeepingRequest, Finance, Billing, BillingItem,
)
from innkeep.routers import (
    auth, property_owners, properties, room_types, rooms, guests,
    reservations, staff, users, housekeeping, finance, billings, dashboard, functions,
)
from innkeep.seed import seed_admin_user

settings = get_settings()
log = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    auth, property_owners, properties, room_types, rooms, guests,
    reservations, staff, users, housekeeping, finance, billings, dashboard, functions,
):
    app.include_router(module.router)


@app.exception_handler(ServiceError)
def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=http_status_for(exc), content={"error": exc.message, "code": exc.code})


@app.on_event("startup")
def startup():
    if not settings.sendgrid_api_key or not settings.from_email:
        log.warning("[SendGrid] Not configured - reminder and confirmation emails will fail; set SENDGRID_API_KEY and FROM_EMAIL")
    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        log.info("[Twilio] Not configured - SMS fallback disabled")
    try:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            seed_admin_user(db)
        finally:
            db.close()
    except Exception as e:
        log.warning("Database startup failed (tables/seed skipped). Check DATABASE_URL. Error: %s", e)

    if settings.housekeeping_reminder_enabled or settings.recurring_tasks_enabled:
        try:
            from apscheduler.schedulers.background import BackgroundScheduler
            from innkeep.services.housekeeping import run_recurring_tasks_job
            from innkeep.services.housekeeping_reminder import run_housekeeping_reminder_job
            scheduler = BackgroundScheduler()
            if settings.housekeeping_reminder_enabled:
                scheduler.add_job(
                    run_housekeeping_reminder_job,
                    "cron",
                    hour=settings.housekeeping_reminder_hour,
                    minute=settings.housekeeping_reminder_minute,
                )
            if settings.recurring_tasks_enabled:
                scheduler.add_job(run_recurring_tasks_job, "cron", hour=settings.recurring_tasks_hour, minute=0)
            scheduler.start()
            app.state.scheduler = scheduler
        except Exception as e:
            log.warning("Scheduler not started: %s", e)


@app.on_event("shutdown")
def shutdown():
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.shutdown(wait=False)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
