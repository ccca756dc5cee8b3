#!/usr/bin/env python3
"""
API entrypoint - checks the database, then serves the incident REST API with uvicorn.
"""

import sys
from pathlib import Path

import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from src.core.config import API_HOST, API_PORT, validate_config, debug_enabled
from src.core.db import check_connection, init_db


def main():
    """Validate configuration, check the database and start the server."""
    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"❌ Configuration error: {issue}")
        return 1

    # Database connection required before serving
    if not check_connection():
        print("❌ Cannot start server: Database connection required")
        return 1
    init_db()

    print(f"🚀 Server running on http://{API_HOST}:{API_PORT}")
    print(f"📡 API endpoints available at http://{API_HOST}:{API_PORT}/api/incidents")
    try:
        uvicorn.run("src.api.main:app", host=API_HOST, port=API_PORT, reload=debug_enabled())
    except KeyboardInterrupt:
        print("\nℹ️  Server interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
