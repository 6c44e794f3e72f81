"""Main FastAPI application module.

This module initializes the FastAPI application and registers all route handlers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging_config import setup_logging
from core.database import init_db
from core.error_handlers import add_error_handlers
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
)
from api.routes import auth, profile, role
from api.routes import student, subject, attendance, grade
from api.routes import report

# Setup logging
setup_logging()

# Initialize FastAPI application
app = FastAPI(
    title="EduTrack API",
    description="Student management: students, subjects, attendance, grades and reports.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)

# Register route handlers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(role.router)
app.include_router(student.router)
app.include_router(subject.router)
app.include_router(attendance.router)
app.include_router(grade.router)
app.include_router(report.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create missing tables."""
    init_db()


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "EduTrack API",
        "version": "1.0.0",
        "description": "Student management: students, subjects, attendance, grades and reports.",
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


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    print(f"Starting EduTrack API at {server_url}")
    print(f"API docs: {server_url}/docs")
    print()

    # reload=True enables auto-reload on code changes
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
