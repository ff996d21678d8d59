"""HTTP middleware: timeout, request ID, correlation ID.

Applied in create_app; order matters (last added = outermost).
"""

from unirecords.middleware.correlation_id import CorrelationIDMiddleware
from unirecords.middleware.request_id import RequestIDMiddleware
from unirecords.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
