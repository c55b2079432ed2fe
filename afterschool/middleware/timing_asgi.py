"""
Pure ASGI Timing Middleware

Logs every HTTP request with its duration and adds an ``X-Process-Time``
header to the response.
"""

import logging
import time

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/health"})


class TimingMiddlewareASGI:
    """
    Pure ASGI middleware to measure and log request processing time.
    """

    def __init__(self, app: ASGIApp, slow_request_ms: float = 100.0) -> None:
        self.app = app
        self.slow_request_ms = slow_request_ms

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI application entrypoint."""

        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        method = scope.get("method", "")

        if path in _QUIET_PATHS:
            await self.app(scope, receive, send)
            return

        logger.info(f"[TIMING] Starting request: {method} {path}")
        start_time = time.time()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                process_time = (time.time() - start_time) * 1000

                logger.info(
                    f"[TIMING] {method} {path} -> {message.get('status')} in {process_time:.2f}ms"
                )

                headers = MutableHeaders(scope=message)
                headers["X-Process-Time"] = f"{process_time:.2f}ms"

                if process_time > self.slow_request_ms:
                    logger.warning(
                        f"[TIMING] Slow request: {method} {path} took {process_time:.2f}ms"
                    )

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(f"[TIMING] Error in request {path} after {process_time:.2f}ms: {str(e)}")
            raise
