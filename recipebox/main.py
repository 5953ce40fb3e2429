"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from supabase import Client

from recipebox.api.routes import ai, health, recipes
from recipebox.config import Settings, settings as default_settings
from recipebox.middleware.logging import RequestLoggingMiddleware, get_request_id
from recipebox.middleware.rate_limit import setup_rate_limiting
from recipebox.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from recipebox.services.recipe_sharing import build_supabase_client
from recipebox.services.text_generation import TextGenerator, build_text_generator
from recipebox.utils.exceptions import (
    AuthenticationError,
    GenerationError,
    ProviderError,
    RecipeBoxException,
    StoreError,
    ValidationError,
)
from recipebox.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

APP_NAME = "Recipe Box API"
APP_VERSION = "1.0.0"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()

    logger.warning(
        f"Validation error: {str(exc)}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors(),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": jsonable_encoder(exc.errors()),
            "request_id": request_id,
            "message": "Request validation failed. Check the 'detail' field for specific errors.",
        },
    )


async def recipebox_exception_handler(request: Request, exc: RecipeBoxException) -> JSONResponse:
    """Handle application exceptions that escaped a route."""
    request_id = get_request_id()

    if isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_message = "Authentication failed"
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Validation error"
    elif isinstance(exc, (ProviderError, GenerationError)):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Generation failed, please try again"
    elif isinstance(exc, StoreError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Data store error"
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"

    logger.error(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "exception": str(exc)},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    text_generator: Optional[TextGenerator] = None,
    supabase_client: Optional[Client] = None,
) -> FastAPI:
    """
    Build the application with its collaborators.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        text_generator: Provider to use instead of the one LLM_PROVIDER names
        supabase_client: Client to use instead of one built from SUPABASE_URL/KEY
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    generator = text_generator or build_text_generator(settings)
    supabase = supabase_client if supabase_client is not None else build_supabase_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{APP_NAME} starting up...")
        logger.info(f"Log level: {settings.log_level}")
        logger.info(f"Text generation provider: {generator.provider} ({generator.model})")
        logger.info(f"Rate limit: {settings.rate_limit_per_hour} requests/hour")
        yield
        logger.info(f"{APP_NAME} shutting down...")
        await generator.aclose()

    app = FastAPI(
        title=APP_NAME,
        description="Recipe generation, meal planning and sharing API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.text_generator = generator
    app.state.supabase = supabase

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RecipeBoxException, recipebox_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    setup_rate_limiting(app, settings)

    # Add middleware (order matters!)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    setup_compression(app)
    setup_cors(app, settings)

    app.include_router(health.router)
    app.include_router(ai.router)
    app.include_router(recipes.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
