"""Request ID middleware.

Forwards a safe client X-Request-ID or generates one, stores it on
scope state and echoes it on the response. Raw ASGI.
"""

import uuid
from typing import Callable

from unirecords.middleware._headers import clean_id, get_header, with_response_header


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id header on each HTTP request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = clean_id(get_header(scope, header_name)) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        await app(scope, receive, with_response_header(send, header_name, request_id))

    return asgi_app
