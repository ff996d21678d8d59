"""Header helpers shared by the raw ASGI middlewares."""

import re
from typing import Callable

# Ids echoed into logs and response headers: alphanumeric, hyphen, underscore.
ID_MAX_LENGTH = 64
_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")


def get_header(scope: dict, name: str) -> str | None:
    """Return the first value of header name (case-insensitive), or None."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def clean_id(raw: str | None) -> str | None:
    """Return raw stripped if it is a safe id, else None."""
    if raw is None:
        return None
    value = raw.strip()
    return value if _ID_PATTERN.match(value) else None


def with_response_header(send: Callable, name: str, value: str) -> Callable:
    """Wrap send so the response start message carries name: value."""
    encoded = (name.encode(), value.encode())

    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            message["headers"] = [*message.get("headers", []), encoded]
        await send(message)

    return send_wrapper
