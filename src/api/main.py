"""
Incident log REST service - FastAPI application, middleware and error handlers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import HealthResponse
from .incidents import router as incidents_router
from ..core.dao import get_incident_count
from ..core.db import init_db, health_check
from ..core.config import VERSION, CORS_ORIGINS, debug_enabled
from util.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Incident Log API {VERSION} ready")
    yield


# Initialize the FastAPI application
app = FastAPI(
    title="Endpoint Incident Log API",
    version=VERSION,
    description="CRUD service for endpoint security incidents with SQLite backend",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None,
    lifespan=lifespan,
)

# Add CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health", response_model=HealthResponse)
def health_check_endpoint():
    """Check system health."""
    db_health = health_check()

    return HealthResponse(
        status="ok" if db_health else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
        db_health=db_health,
        incident_count=get_incident_count() if db_health else 0,
    )


app.include_router(incidents_router, prefix="/api/incidents", tags=["incidents"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report invalid request bodies and parameters as 400 with a readable message."""
    messages = []
    for error in exc.errors():
        field = error.get("loc", ["request"])[-1]
        msg = str(error.get("msg", "invalid value")).replace("Value error, ", "")
        messages.append(f"{field}: {msg}")

    logger.log_operation("api.validation", "rejected", {"path": request.url.path, "errors": messages})
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all unhandled exceptions."""
    logger.error(f"Unhandled exception: {exc}")
    content = {"detail": "Internal server error"}
    if debug_enabled():
        content["debug"] = str(exc)
    status_code = 500
    return JSONResponse(
        status_code=status_code,
        content=content,
    )
