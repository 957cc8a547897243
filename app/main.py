# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Private Photos API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3000
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    PhotoShareException,
    photoshare_exception_handler,
    validation_exception_handler,
)
from app.routers import health, posts, comments, frontend
from core.services.storage_service import StorageService
from lib.supabase_client import RecordStore, create_supabase_client

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

    Startup creates the Supabase client once and hands it to the record
    store and storage service kept on app.state.
    """
    logger.info(f"Starting Private Photos API in {settings.ENVIRONMENT} mode")
    logger.info(f"Storage bucket: {settings.SUPABASE_BUCKET}")

    client = await create_supabase_client(settings)
    app.state.record_store = RecordStore(client)
    app.state.storage_service = StorageService(client, settings.SUPABASE_BUCKET)

    yield

    logger.info("Shutting down Private Photos API")


# Create FastAPI application
app = FastAPI(
    title="Private Photos API",
    description="""
## Photo Sharing Backend

Upload an image with a caption, list posts with temporary signed URLs,
like and comment. Posts, likes and comments are stored in Supabase;
images live in a private Supabase Storage bucket.

### Quick Start

```bash
# 1. Upload a photo
curl -X POST http://localhost:3000/api/posts \\
  -F "image=@beach.jpg" -F "caption=hi"

# 2. List posts (newest first)
curl http://localhost:3000/api/posts

# 3. Like and comment
curl -X POST http://localhost:3000/api/posts/{id}/like
curl -X POST http://localhost:3000/api/posts/{id}/comments \\
  -H "Content-Type: application/json" -d '{"body": "nice"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Posts",
            "description": "Upload, list, delete and like posts",
        },
        {
            "name": "Comments",
            "description": "Comments on a post",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
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

@app.exception_handler(PhotoShareException)
async def handle_photoshare_exception(request: Request, exc: PhotoShareException):
    """Handle custom API exceptions."""
    return await photoshare_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed requests."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error"},
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Post endpoints
app.include_router(
    posts.router,
    prefix="/api/posts",
    tags=["Posts"]
)

# Comment endpoints
app.include_router(
    comments.router,
    prefix="/api/posts",
    tags=["Comments"]
)

# Static bundle + fallback document; must stay last
app.include_router(frontend.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.PORT)
