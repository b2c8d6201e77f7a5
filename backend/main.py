"""
Cost Insight Dashboard - FastAPI Main Application
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from pathlib import Path
import sys

# Add backend to the path
sys.path.append(str(Path(__file__).parent))

from config import settings
from api.routes import cost_models_router, measured_works_router
from services.exceptions import (
    CostInsightError,
    ConfigurationError,
    ValidationError,
)
from services.nrm2_templates import NRM2TemplateProvider, get_template_provider
from store.repository import CostRepository
from utils.logger import configure_logging

configure_logging()

logger = logging.getLogger(__name__)


def _validation_details(exc: RequestValidationError) -> list:
    """Per-field messages for a request validation error"""
    details = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        details.append({
            "field": ".".join(str(part) for part in loc),
            "message": error.get("msg", "Invalid value")
        })
    return details


def create_app(
    repository: Optional[CostRepository] = None,
    templates: Optional[NRM2TemplateProvider] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        repository: Repository to serve (a new empty one by default)
        templates: NRM2 template provider (the shared one by default)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description="Construction cost models and NRM2 measured works",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.repository = repository if repository is not None else CostRepository()
    app.state.templates = templates if templates is not None else get_template_provider()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming request"""
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    # =====================================================
    # STARTUP/SHUTDOWN EVENTS
    # =====================================================

    @app.on_event("startup")
    async def startup_event():
        """Startup initialisation"""
        logger.info("=" * 60)
        logger.info(f"🚀 {settings.API_TITLE} v{settings.API_VERSION}")
        logger.info(f"   Environment: {settings.ENV}")
        logger.info(f"   Port: {settings.API_PORT}")
        logger.info(f"   CORS enabled for: {', '.join(settings.CORS_ORIGINS)}")
        logger.info(f"   NRM2 defaults: {app.state.templates.config_path}")
        logger.info("=" * 60)

        if settings.SEED_DATA:
            app.state.repository.seed_data()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("👋 Shutting down Cost Insight Dashboard API...")

    # =====================================================
    # BASIC ROUTES
    # =====================================================

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.API_TITLE,
            "version": settings.API_VERSION,
            "endpoints": {
                "health": "GET /api/health",
                "models": "GET /api/models",
                "modelDetail": "GET /api/models/:id",
                "createModel": "POST /api/models",
                "calculateModel": "POST /api/models/:id/calculate",
                "addWork": "POST /api/models/:id/works",
                "deleteModel": "DELETE /api/models/:id",
                "updateWork": "PATCH /api/measured-works/:id",
                "deleteWork": "DELETE /api/measured-works/:id"
            }
        }

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "message": f"{settings.API_TITLE} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.ENV
        }

    # =====================================================
    # ROUTERS
    # =====================================================

    app.include_router(cost_models_router, prefix="/api/models", tags=["Cost Models"])
    app.include_router(measured_works_router, prefix="/api/measured-works", tags=["Measured Works"])

    # =====================================================
    # ERROR HANDLING
    # =====================================================

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Invalid request bodies are reported as 400 with per-field details"""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Validation Error",
                "message": "Invalid request data",
                "details": _validation_details(exc)
            }
        )

    @app.exception_handler(CostInsightError)
    async def cost_insight_error_handler(request: Request, exc: CostInsightError):
        """Application errors carry their own HTTP status"""
        content = {
            "success": False,
            "error": exc.error,
            "message": exc.message
        }

        if isinstance(exc, ValidationError):
            if exc.details:
                content["details"] = exc.details
        elif isinstance(exc, ConfigurationError):
            logger.error(f"Configuration error: {exc.message}")
            content["message"] = "Server configuration error"
        elif exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}", exc_info=exc.__cause__)

        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and unsupported methods"""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Cannot {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": HTTPStatus(exc.status_code).phrase, "message": message},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal Server Error",
                "message": str(exc) if settings.ENV == "development" else "An error occurred"
            }
        )

    return app


app = create_app()


# =====================================================
# MAIN (to run directly)
# =====================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower()
    )
