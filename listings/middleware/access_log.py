"""Access log middleware: one INFO line per HTTP request.

Logs method, path, status and duration. Raw ASGI; must run inside
RequestIDMiddleware so the log line carries the request id.
"""

import logging
import time
from typing import Callable

logger = logging.getLogger("listings.access")


def AccessLogMiddleware(app: Callable) -> Callable:
    """Log every HTTP request after its response status is known. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        start = time.perf_counter()
        status = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s %s %.1fms",
                scope.get("method", ""),
                scope.get("path", ""),
                status,
                (time.perf_counter() - start) * 1000,
            )

    return asgi_app
