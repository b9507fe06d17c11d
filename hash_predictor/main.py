import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hash_predictor.api.v1.router import api_router
from hash_predictor.core.config import get_settings
from hash_predictor.core.exceptions import HashPredictorError, ValidationError
from hash_predictor.core.logging import configure_logging
from hash_predictor.middleware.logging_middleware import LoggingMiddleware
from hash_predictor.models.schemas import ErrorResponse

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    logger.info(f"Starting {settings.app_name} ({settings.app_env})")
    yield
    logger.info(f"Stopping {settings.app_name}")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        ).model_dump(),
    )


async def predictor_error_handler(request: Request, exc: HashPredictorError) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc.message}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        ).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Hash Predictor API. "
            "Scores 128-character hex hashes with fixed entropy, sampling, "
            "pattern and checksum heuristics, and ranks target multipliers."
        ),
        version="0.1.0",
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url=f"{settings.api_v1_prefix}/docs",
        redoc_url=f"{settings.api_v1_prefix}/redoc",
        lifespan=lifespan,
    )

    # Request logging
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handlers
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(HashPredictorError, predictor_error_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/health", tags=["Health"], summary="Health check")
    async def health() -> dict[str, str]:
        return {
            "status": "ok",
            "app": settings.app_name,
            "environment": settings.app_env,
        }

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "hash_predictor.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
