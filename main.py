"""
Shipment Document Parser - Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import shutil
import structlog
from datetime import datetime, timezone

from config import settings, configure_logging

# Configure structured logging
configure_logging(settings)

logger = structlog.get_logger(__name__)


def check_text_extractor() -> dict:
    """Report whether the configured text extraction backend is usable."""
    if settings.text_extractor == "pdfplumber":
        return {"backend": "pdfplumber", "status": "healthy"}

    executable = shutil.which(settings.pdftotext_path)
    return {
        "backend": "pdftotext",
        "status": "healthy" if executable else "unavailable",
        "path": executable,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Check the text extraction backend
    Shutdown: Log
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug
    )

    extractor_status = check_text_extractor()
    if extractor_status["status"] == "healthy":
        logger.info("text_extractor_ready", backend=extractor_status["backend"])
    else:
        logger.error(
            "text_extractor_unavailable",
            backend=extractor_status["backend"],
            path=settings.pdftotext_path
        )

    yield

    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Shipment Document Parser",
    description="Structured shipments from multi-language transport instruction PDFs",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and text extraction backend state
    """
    extractor_status = check_text_extractor()

    return {
        "status": "healthy" if extractor_status["status"] == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "text_extractor": extractor_status
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Shipment Document Parser API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "parse_document": "/api/shipments/parse",
            "parse_text": "/api/shipments/parse-text"
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.shipments import router as shipments_router

app.include_router(shipments_router)  # Prefix already in router


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
