"""
Error handling middleware for TikSave.

This module renders classified errors as consistent JSON responses and logs
them with request context.
"""

import time
import logging
import traceback
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from tiksave.core.exceptions import TikSaveException, InternalError, ErrorCode, GENERIC_MESSAGE


logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for handling all application errors with consistent formatting.

    Provides structured error responses and logging for every error raised
    while processing a request.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        """
        Process request and handle any errors that occur.

        Args:
            request: FastAPI request object
            call_next: Next middleware/endpoint in the chain

        Returns:
            Response object with error handling applied
        """
        start_time = time.time()

        try:
            return await call_next(request)

        except TikSaveException as e:
            return self._handle_tiksave_exception(request, e, start_time)

        except HTTPException as e:
            return self._handle_http_exception(request, e, start_time)

        except Exception as e:
            return self._handle_unexpected_exception(request, e, start_time)

    def _handle_tiksave_exception(
        self,
        request: Request,
        exc: TikSaveException,
        start_time: float
    ) -> JSONResponse:
        """Handle classified TikSave exceptions."""
        response_time = (time.time() - start_time) * 1000

        log_data = {
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "path": request.url.path,
            "method": request.method,
            "response_time_ms": round(response_time, 2),
            "retryable": exc.retryable
        }

        if exc.status_code >= 500:
            logger.error(f"TikSave error: {exc.message}", extra=log_data)
        else:
            logger.warning(f"TikSave error: {exc.message}", extra=log_data)

        response_data = exc.to_dict()
        response_data["response_time_ms"] = round(response_time, 2)

        return JSONResponse(
            status_code=exc.status_code,
            content=response_data
        )

    def _handle_http_exception(
        self,
        request: Request,
        exc: HTTPException,
        start_time: float
    ) -> JSONResponse:
        """Handle FastAPI HTTP exceptions."""
        response_time = (time.time() - start_time) * 1000

        logger.warning(
            f"HTTP exception: {exc.detail}",
            extra={
                "status_code": exc.status_code,
                "path": request.url.path,
                "method": request.method,
                "response_time_ms": round(response_time, 2)
            }
        )

        response_data = {
            "success": False,
            "error": ErrorCode.INTERNAL_ERROR.value if exc.status_code >= 500 else "http_error",
            "message": str(exc.detail),
            "suggestion": GENERIC_MESSAGE,
            "retryable": exc.status_code >= 500,
            "response_time_ms": round(response_time, 2)
        }

        return JSONResponse(
            status_code=exc.status_code,
            content=response_data
        )

    def _handle_unexpected_exception(
        self,
        request: Request,
        exc: Exception,
        start_time: float
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        response_time = (time.time() - start_time) * 1000

        logger.error(
            f"Unexpected error: {str(exc)}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "response_time_ms": round(response_time, 2),
                "traceback": traceback.format_exc()
            }
        )

        internal_error = InternalError(reason=str(exc))
        response_data = internal_error.to_dict()
        response_data["response_time_ms"] = round(response_time, 2)

        return JSONResponse(
            status_code=500,
            content=response_data
        )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request body validation errors in the TikSave error format."""
    error_detail = exc.errors()[0] if exc.errors() else {}
    field_name = error_detail.get('loc', ['unknown'])[-1] if error_detail.get('loc') else 'unknown'
    error_msg = error_detail.get('msg', 'Validation error')

    logger.warning(
        f"Validation error: {error_msg}",
        extra={
            "field": field_name,
            "path": request.url.path,
            "method": request.method
        }
    )

    if 'url' in str(field_name).lower():
        error_code = ErrorCode.INVALID_URL_SHAPE
        suggestion = "Please enter a valid TikTok URL."
    else:
        error_code = ErrorCode.INTERNAL_ERROR
        suggestion = "Please check your input and try again"

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": error_code.value,
            "message": f"Invalid {field_name}: {error_msg}",
            "suggestion": suggestion,
            "retryable": False,
            "details": {"field": str(field_name)}
        }
    )
