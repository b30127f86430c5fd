import logging
import os
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from pydantic import ValidationError as PydanticValidationError
from .config import Settings, settings
from .database import Database
from .api.routes import api_router
from .middleware import RequestLoggingMiddleware
from .utils import error_response
from .services.error_handling import ServiceError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_validation_errors(errors) -> list:
    """Flatten pydantic error entries into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        context_error = (error.get("ctx") or {}).get("error")
        formatted.append({
            "field": ".".join(location) or "body",
            "message": str(context_error) if context_error else error.get("msg", "Invalid value")
        })
    return formatted


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    db = Database(app_settings.DB_PATH)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.init_schema()
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title=app_settings.API_TITLE,
        description=app_settings.API_DESCRIPTION,
        version=app_settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.db = db
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGIN_LIST,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if app_settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)

    # The browser client; registered last so /api routes take precedence.
    if os.path.isdir(app_settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=app_settings.STATIC_DIR, html=True), name="client")
    else:
        logger.warning(f"Static directory not found, browser client disabled: {app_settings.STATIC_DIR}")


    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handle service-specific errors with appropriate status codes and formatting."""
        if exc.status_code >= 500:
            logger.error(f"Service error: {exc.message}", exc_info=True)
            message = "Internal server error" if exc.error_code == "DATABASE_ERROR" else exc.message
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
            message = exc.message
        return error_response(message, exc.status_code, errors=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.warning(f"{request.method} {request.url.path} failed validation: {errors}")
        return error_response("Validation failed", status.HTTP_400_BAD_REQUEST, errors=errors)

    @app.exception_handler(PydanticValidationError)
    async def validation_error_handler(request: Request, exc: PydanticValidationError):
        return error_response(
            "Validation failed",
            status.HTTP_400_BAD_REQUEST,
            errors=format_validation_errors(exc.errors())
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            return error_response(exc.detail["message"], exc.status_code)
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions with a simplified 500 error response."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "customer_api.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
