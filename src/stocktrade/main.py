"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stocktrade import __version__
from stocktrade.api.routers import portfolio_router, stocks_router, transactions_router
from stocktrade.api.schemas import ErrorBody, ErrorResponse
from stocktrade.app_context import AppContext
from stocktrade.config.logging_config import setup_logging
from stocktrade.core.exceptions import AppError, VendorUnavailableError

logger = logging.getLogger(__name__)

SERVICE_NAME = "stock-trading-service"
VENDOR_UNAVAILABLE_MESSAGE = (
    "Stock vendor service is temporarily unavailable. Please try again later."
)


def _error_response(status: int, message: str, code: str, details=None) -> JSONResponse:
    body = ErrorResponse(status=status, error=ErrorBody(message=message, code=code, details=details))
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Services to serve; a default AppContext is built when omitted.
    """
    context = context or AppContext()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging(context.settings)
        logger.info(
            "%s starting (environment=%s)",
            context.settings.app_name,
            context.settings.environment,
        )
        context.start_scheduler()
        yield
        # Shutdown
        context.close()
        logger.info("%s stopped", context.settings.app_name)

    app = FastAPI(
        title=context.settings.app_name,
        description="Stock trading service backed by an external vendor API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    app.include_router(stocks_router)
    app.include_router(transactions_router)
    app.include_router(portfolio_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        logger.error(
            "Error occurred: %s (code=%s method=%s path=%s)",
            exc.message,
            exc.code,
            request.method,
            request.url.path,
        )
        message = exc.message
        if isinstance(exc, VendorUnavailableError):
            message = VENDOR_UNAVAILABLE_MESSAGE
        return _error_response(exc.status_code, message, exc.code, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed requests answer 400 with one entry per invalid field."""
        details = [
            {
                "field": ".".join(
                    str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")
                ),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        return _error_response(400, "Validation failed", "VALIDATION_ERROR", details)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, "Internal server error", "INTERNAL_ERROR")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "UP",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": __version__,
        }

    return app


app = create_app()
