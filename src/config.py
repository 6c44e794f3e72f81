"""Configuration module for EduTrack.

This module provides centralized configuration management, including directory
paths, database and API server settings, authentication and report thresholds.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

# Any SQLAlchemy URL; SQLite file under data/ by default
DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/edutrack.db")

# Echo SQL statements (set to "true" for debugging)
DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080,"
    "http://127.0.0.1:8080",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7))
)

# Token required to sign up directly as admin (set via ADMIN_TOKEN)
ADMIN_TOKEN: Optional[str] = os.getenv("ADMIN_TOKEN")

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR: Path = Path(os.getenv("LOG_DIR", str(ROOT_DIR / "logs")))
LOG_FILE_NAME: str = "edutrack.log"

# --- Grade / Report Thresholds ---

# Lower bound of each grade standing band, checked from the top down.
GRADE_STANDING_BANDS: Dict[str, float] = {
    "Excellent": 90.0,
    "Good": 80.0,
    "Average": 70.0,
}
GRADE_STANDING_FALLBACK: str = "Below Average"

# (minimum grade, minimum attendance %) per performance label
PERFORMANCE_EXCELLENT = (85.0, 90.0)
PERFORMANCE_GOOD = (70.0, 80.0)
# Either value under this marks a student as needing attention
PERFORMANCE_ATTENTION_FLOOR: float = 70.0
