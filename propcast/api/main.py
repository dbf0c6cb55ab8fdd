"""
FastAPI application for PropCast.

Provides REST API endpoints for:
- Year-by-year property projections
- Headline KPIs (break-even, NPV, milestones, DSCR, LVR)
- Debt paydown and growth analysis series
- Loan summaries
"""

import logging
import traceback
from typing import Dict, Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from propcast import __version__
from propcast.api.config import ApiConfig
from propcast.api.routes import projections
from propcast.utils.error_utils import PropcastError

logger = logging.getLogger("propcast")

config = ApiConfig()

# Create FastAPI application
app = FastAPI(
    title="PropCast API",
    description="Property investment cashflow, tax and equity projections",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# CORS configuration for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PropcastError)
async def propcast_exception_handler(request: Request, exc: PropcastError):
    """Engine rejected the inputs."""
    logger.warning(f"Projection error on {request.method} {request.url.path}: {exc.message}")
    error_type = exc.details.get("error_type") if isinstance(exc.details, dict) else None
    return JSONResponse(
        status_code=422,
        content={
            "error": "Projection failed",
            "detail": exc.message,
            "type": error_type or type(exc).__name__,
        },
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )


# Health check endpoint
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """API health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "propcast-api",
    }


# Include routers
app.include_router(projections.router, prefix="/api/projections", tags=["Projections"])


# Root endpoint
@app.get("/")
async def root() -> Dict[str, Any]:
    """API root endpoint with service information."""
    return {
        "service": "PropCast API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "propcast.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not config.is_serverless,
        log_level="info",
    )
