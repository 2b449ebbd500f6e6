"""Logging setup and per-request access logging."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure the root logger once.

    Calling it again (e.g. on reload) leaves existing handlers alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request on entry (method, path, client) and exit (status, duration).

    The body is never read here so downstream handlers still see it.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        method = request.method
        path = request.url.path
        client = f"{request.client.host}:{request.client.port}" if request.client else "-"

        logger.info(f"--> {method} {path} from {client}")
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"<-- {method} {path} raised after {duration_ms:.1f}ms")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"<-- {method} {path} {response.status_code} in {duration_ms:.1f}ms")
        return response
