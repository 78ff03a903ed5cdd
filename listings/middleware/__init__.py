"""HTTP middleware: timeout, request ID, access log, security headers.

Applied in main app; order matters (last added = outermost).
"""

from listings.middleware.access_log import AccessLogMiddleware
from listings.middleware.request_id import RequestIDMiddleware, get_request_id
from listings.middleware.security_headers import SecurityHeadersMiddleware
from listings.middleware.timeout import TimeoutMiddleware

__all__ = [
    "AccessLogMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
    "get_request_id",
]
