"""HTTP error handlers for the FastAPI application.

Maps domain exceptions to status codes and to the `{"error": ..., "details": ...}`
body used by every error response of the API. Domain code never builds HTTP
responses itself.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from reset_api.exceptions import (
    AppException,
    MalformedRequestError,
    TokenValidationError,
)


async def token_validation_error_handler(
    request: Request, exc: TokenValidationError
) -> JSONResponse:
    """
    Convert a rejected token check (missing parameter, unknown or expired token) into a 400 response.

    Returns:
        JSONResponse: Status 400 with body `{"error": "<exception message>"}`.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
    )


async def malformed_request_handler(
    request: Request, exc: MalformedRequestError
) -> JSONResponse:
    """
    Convert an unparsable request payload into a 500 response carrying the parse error.

    Returns:
        JSONResponse: Status 500 with body `{"error": "<summary>", "details": "<parse error>"}`.
    """
    logger.error(f"Token validation error: {exc.details}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc), "details": exc.details},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Catch-all for application exceptions without a dedicated handler."""
    logger.error(f"Unhandled application error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "验证令牌失败", "details": str(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler so that unexpected failures still use the API error body.

    Returns:
        JSONResponse: Status 500 with body `{"error": "验证令牌失败", "details": "<exception message>"}`.
    """
    logger.opt(exception=exc).error(f"Token validation error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "验证令牌失败", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain-to-HTTP exception handlers on a FastAPI app.

    Handlers are added from most specific to most general:
    TokenValidationError (MissingParameterError, TokenInvalidOrExpiredError) -> 400,
    MalformedRequestError -> 500 with `details`, AppException -> 500,
    and any other Exception -> 500 with `details`.
    """
    app.add_exception_handler(TokenValidationError, token_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(MalformedRequestError, malformed_request_handler)  # type: ignore[arg-type]

    # Catch-all for unhandled application exceptions
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
