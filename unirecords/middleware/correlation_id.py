"""Correlation ID middleware.

Propagates X-Correlation-ID across services. Falls back to the request id
(RequestIDMiddleware must wrap this one) and then to a new UUID. Raw ASGI.
"""

import uuid
from typing import Callable

from unirecords.middleware._headers import clean_id, get_header, with_response_header


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation id header on each HTTP request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        state = scope.setdefault("state", {})
        correlation_id = (
            clean_id(get_header(scope, header_name))
            or state.get("request_id")
            or str(uuid.uuid4())
        )
        state["correlation_id"] = correlation_id
        await app(
            scope, receive, with_response_header(send, header_name, correlation_id)
        )

    return asgi_app
