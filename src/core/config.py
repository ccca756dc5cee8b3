"""
Incident log configuration - environment driven settings for the API and dashboard.
"""

import os
from pathlib import Path

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/incidents.db")

# Debug flag is now a function to be dynamic
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# REST service configuration
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "3001"))
API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{API_PORT}/api")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
REQUEST_TIMEOUT_SEC = float(os.getenv("REQUEST_TIMEOUT_SEC", "10"))

# Startup connection check
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "5"))
DB_CONNECT_DELAY_SEC = float(os.getenv("DB_CONNECT_DELAY_SEC", "3"))

# List view configuration
PAGE_SIZE_OPTIONS = (5, 10, 25, 50)
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_SORT_KEYS = 2

# Version string
VERSION = "1.0.0"


def get_db_path() -> str:
    """Database path, re-read from the environment on every call."""
    return os.getenv("DB_PATH", DB_PATH)


def get_api_base_url() -> str:
    """Base URL the dashboard uses to reach the REST service."""
    return os.getenv("API_BASE_URL", API_BASE_URL).rstrip("/")


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def ensure_db_directory():
    """Ensure the database directory exists."""
    Path(get_db_path()).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if DEFAULT_PAGE_SIZE not in PAGE_SIZE_OPTIONS:
        issues.append(f"DEFAULT_PAGE_SIZE must be one of {list(PAGE_SIZE_OPTIONS)}, got {DEFAULT_PAGE_SIZE}")

    if not 0 < API_PORT < 65536:
        issues.append(f"Invalid API_PORT: {API_PORT}")

    if DB_CONNECT_RETRIES < 1:
        issues.append("DB_CONNECT_RETRIES must be >= 1")

    if DB_CONNECT_DELAY_SEC < 0:
        issues.append("DB_CONNECT_DELAY_SEC must be >= 0")

    if REQUEST_TIMEOUT_SEC <= 0:
        issues.append("REQUEST_TIMEOUT_SEC must be > 0")

    return issues
