"""FastAPI application factory.

Creates the diagnostics application with exception handlers and routes.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from trustledger import __version__
from trustledger.api.exceptions import TrustLedgerAPIError
from trustledger.api.models.errors import ErrorBody, ErrorCode, ErrorResponse
from trustledger.api.routes import register_routes
from trustledger.config.settings import Settings
from trustledger.observability.logging import get_logger

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the diagnostics application.

    The runtime must be configured before the first request; routes read
    ledgers from it.

    Args:
        settings: Settings for metrics exposure (defaults when omitted)
    """
    app = FastAPI(
        title="trustledger diagnostics",
        description="Read-only inspection of audit ledgers",
        version=__version__,
    )

    _register_exception_handlers(app)
    register_routes(app, settings.observability.metrics if settings else None)

    logger.info("app_created")
    return app


def _error(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TrustLedgerAPIError)
    async def api_error_handler(request: Request, exc: TrustLedgerAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)
        return _error(400, ErrorCode.INVALID_REQUEST, "Request validation failed")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred")
