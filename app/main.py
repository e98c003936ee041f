# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Edit API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    EditAPIException,
    edit_api_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import health, editor
from app.auth import routes as auth_routes
from lib.supabase_client import DatabaseConnection, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup connects to the database eagerly. A failure is logged but does
    not stop the server: requests call ensure_connected() again and report
    a store error until the database is reachable.
    """
    logger.info(f"Starting {settings.APP_NAME} API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        app.state.database.ensure_connected()
    except SupabaseClientError as e:
        logger.error(f"Database connection failed: {e}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME} API")


# Create FastAPI application
app = FastAPI(
    title="Edit API",
    description="""
## Edit - Code Editor API

Backend for the browser-based code editor.

### Editor Activity

The editor reports when the user starts and stops editing. Time is grouped
by calendar day in Indian Standard Time (UTC+5:30).

```bash
# Start an editing interval
curl -X POST http://localhost:3000/api/editor/activity \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"action": "start"}'

# Total seconds spent editing today
curl http://localhost:3000/api/editor/today -H "Authorization: Bearer $TOKEN"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify Supabase access tokens",
        },
        {
            "name": "Editor",
            "description": "Editor activity tracking",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)

# One database handle per process, created before any request is served
app.state.database = DatabaseConnection(
    settings.SUPABASE_URL,
    settings.SUPABASE_SERVICE_KEY,
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(EditAPIException)
async def handle_edit_api_exception(request: Request, exc: EditAPIException):
    """Handle custom Edit API exceptions."""
    return await edit_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP errors (401, 404, ...)."""
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Editor activity endpoints
app.include_router(
    editor.router,
    prefix="/api/editor",
    tags=["Editor"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }
