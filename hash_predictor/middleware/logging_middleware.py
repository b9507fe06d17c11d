"""
Request logging middleware.
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status and processing time.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(f"-> {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time

        logger.info(
            f"<- {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s"
        )

        response.headers["X-Process-Time"] = str(process_time)

        return response
