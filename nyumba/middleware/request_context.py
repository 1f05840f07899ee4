"""
Request context middleware: request IDs, size limits, access logging and timing.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from nyumba.services.error_handler import ErrorHandlerService
from nyumba.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID, rejects oversized bodies and reports
    the processing time in the X-Request-ID and X-Processing-Time headers.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 50 * 1024 * 1024,  # 50MB, room for a full photo upload
        slow_request_threshold: float = 1.0,  # seconds
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.slow_request_threshold = slow_request_threshold
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            self._validate_request_size(request)
        except BadRequestError as exc:
            logger.warning(f"Rejected request [{request_id}] {request.method} {request.url.path}: {exc.detail}")
            response = ErrorHandlerService.handle_api_exception(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response

        response = await call_next(request)

        processing_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"

        if processing_time > self.slow_request_threshold:
            logger.warning(
                f"Slow request [{request_id}]: {request.method} {request.url.path} "
                f"took {processing_time:.3f}s (threshold {self.slow_request_threshold}s)"
            )
        elif self.enable_request_logging:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"[{request_id}] {processing_time:.3f}s"
            )

        return response

    def _validate_request_size(self, request: Request) -> None:
        content_length = request.headers.get("content-length")
        if not content_length:
            return
        try:
            size = int(content_length)
        except ValueError:
            raise BadRequestError("Invalid Content-Length header")
        if size > self.max_request_size:
            raise BadRequestError(
                f"Request size ({size} bytes) exceeds maximum allowed size ({self.max_request_size} bytes)"
            )
