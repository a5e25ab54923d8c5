"""Main FastAPI application module.

This module initializes the FastAPI application and registers all route handlers.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.error_handlers import register_exception_handlers
from core.logging_config import setup_logging
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
    Settings,
    load_settings,
)
from api.routes import auth, course, profile
from schemas.common import ERROR_RESPONSES
from utils.mailer import Mailer

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, mailer: Optional[Mailer] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Runtime settings; loaded from the environment when omitted.
        mailer: Notification mailer; built from ``settings.mail`` when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Smart Attendance API",
        description="Backend API for departmental attendance: students, lecturers and courses.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.mailer = mailer or Mailer(settings.mail)

    # Configure CORS middleware; credentials allowed so the token cookie travels
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register route handlers
    app.include_router(auth.router, responses=ERROR_RESPONSES)
    app.include_router(profile.router, responses=ERROR_RESPONSES)
    app.include_router(course.router, responses=ERROR_RESPONSES)

    @app.get("/", summary="API root", tags=["Info"])
    def root() -> dict:
        """API root, returns API information and documentation links."""
        return {
            "name": "Smart Attendance API",
            "message": "Welcome to the smart attendance system",
            "docs": {
                "swagger": "/docs",
                "redoc": "/redoc",
            },
            "health": "/api/health",
        }

    @app.get("/api/health", summary="Health check", tags=["Health"])
    def health() -> dict:
        """Health check endpoint.

        Returns:
            Dictionary with status "ok".
        """
        return {"status": "ok"}

    if not app.state.mailer.configured:
        logger.warning("SMTP_HOST is not set; outgoing email is disabled")
    return app


app = create_app()


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    print(f"Starting Smart Attendance API at {server_url}")
    print(f"API docs: {server_url}/docs")

    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
