"""Logging setup: stdout handler with the request id on every line."""

import logging
import sys

from listings.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach the current request id (or "-") to each record as record.request_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        from listings.middleware.request_id import get_request_id

        record.request_id = get_request_id() or "-"
        return True


def setup_logging() -> None:
    """Configure root logging once per process.

    DEBUG when settings.debug, else INFO. Calling it again (tests, reload)
    replaces the handler instead of stacking a second one.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        handlers=[handler],
        force=True,
    )
    # Per-command / per-request chatter at DEBUG.
    for noisy in ("redis", "httpx", "httpcore", "aiosqlite", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    # The access middleware already logs each request.
    logging.getLogger("uvicorn.access").disabled = True
