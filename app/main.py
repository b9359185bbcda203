from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from datetime import datetime
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

from app.routers import (
    admin,
    auth,
    bookings,
    countries,
    facilities,
    partner_registration,
)
from app.database import engine, Base, SessionLocal
from app.init_db import create_initial_admin
from app.services.email import email_service
from app import models  # noqa: F401  registers every model on Base
import uvicorn


def _init_database() -> None:
    if os.getenv("INIT_DB_ON_STARTUP", "true").lower() not in {"1", "true", "yes"}:
        return

    Base.metadata.create_all(bind=engine)
    logger.info("Initializing database with initial admin...")
    db = SessionLocal()
    try:
        create_initial_admin(db)
    finally:
        db.close()


_init_database()

app = FastAPI(
    title="Sportify API",
    description="API for browsing and booking sports facilities, partner registration and moderation",
    version="1.0.0",
)


def _configure_email_error_reporting() -> None:
    if not email_service.enabled:
        logger.info(
            "Email error reporting disabled (ENABLE_ERROR_EMAILS not set or false)"
        )
        return

    if not email_service.is_configured():
        logger.warning("Email service not configured: missing SMTP settings")
        return

    logger.info("Email error reporting configured successfully")


_configure_email_error_reporting()

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(countries.router, prefix="/countries", tags=["countries"])
app.include_router(facilities.router, prefix="/facilities", tags=["facilities"])
app.include_router(
    partner_registration.router,
    prefix="/partner-registration",
    tags=["partner-registration"],
)
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.get("/")
def read_root():
    return {"message": "Welcome to Sportify API"}


# Global unhandled exception handler -> logs ERROR and sends email
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )

    if email_service.should_report():
        error_data = {
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
            "user": getattr(request.state, "user_email", "Anonymous"),
            "exception": exc,
            "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
        }
        email_service.send_error_email(error_data)

    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
