"""
API middleware for the Health Literacy Translator.

Provides:
- Rate limiting
- Request body size limit
- Request logging
- Global error handling
"""

import time
from typing import Callable

from fastapi import Request, Response, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("middleware")


# Rate limiter using client IP
limiter = Limiter(key_func=get_remote_address)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose declared body exceeds max_request_bytes.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit():
            if int(content_length) > settings.max_request_bytes:
                logger.warning(
                    "Request body too large",
                    path=request.url.path,
                    content_length=int(content_length),
                    limit=settings.max_request_bytes
                )
                return JSONResponse(
                    status_code=413,
                    content={"error": "Payload too large"}
                )

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Logs:
    - Request method, path, client
    - Response status code
    - Processing time
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = get_remote_address(request)

        logger.info(
            "Request received",
            method=method,
            path=path,
            client_ip=client_ip
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=method,
                path=path,
                status_code=response.status_code,
                process_time_ms=int(process_time * 1000)
            )

            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as e:
            process_time = time.time() - start_time

            logger.error(
                "Request failed",
                method=method,
                path=path,
                error=str(e),
                process_time_ms=int(process_time * 1000)
            )
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns ``{"error": "Server error"}``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)

        except HTTPException:
            raise

        except Exception as e:
            logger.error("Unhandled exception", error=str(e), exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "Server error"}
            )


def setup_rate_limiting(app) -> None:
    """Setup rate limiting on the application."""
    app.state.limiter = limiter

    @app.exception_handler(429)
    async def rate_limit_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=429,
            content={
                "error": "Rate limit exceeded",
                "details": "Too many requests. Please wait before trying again."
            }
        )


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into ``loc: msg`` pairs."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    )


def setup_validation_handling(app) -> None:
    """Report malformed bodies as ``{error, details}`` instead of FastAPI's 422."""

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        details = describe_validation_errors(exc)
        logger.warning("Invalid request body", path=request.url.path, details=details)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": details}
        )
