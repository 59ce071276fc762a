"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "UNAUTHORIZED",
            "message": "You do not have permission to perform this action",
            "details": {}
        }
    }

Exception Handling:
===================
1. Level2Exception subclasses → Use their status_code and to_dict()
2. Request/Pydantic validation errors → 400 VALIDATION_ERROR
3. Other exceptions → 500 with generic message (details hidden)

Public not-found responses also carry Cache-Control: no-store so a miss is
never served from a cache after the link becomes visible, or vice versa.

Usage:
======
    from src.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from src.shared.core.exceptions import Level2Exception, PublicProfileNotFoundError
from src.shared.core.logging import logger


NO_STORE = {"Cache-Control": "no-store"}


def _summarize(errors: Sequence[Any]) -> list[dict[str, Any]]:
    """Keep only the JSON-safe parts of pydantic error entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def _validation_response(errors: Sequence[Any]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": _summarize(errors)},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(Level2Exception)
    async def level2_exception_handler(
        request: Request,
        exc: Level2Exception,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from Level2Exception and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        headers = NO_STORE if isinstance(exc, PublicProfileNotFoundError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle request parsing errors.

        These occur when the body, path or query doesn't match the expected schema.
        """
        logger.warning("Request validation error", errors=_summarize(exc.errors()), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(PydanticValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: PydanticValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors raised while building responses."""
        logger.warning("Validation error", errors=_summarize(exc.errors()), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )
