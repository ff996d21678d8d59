"""Rate limiter instance for SlowAPI.

Shared so both create_app (app.state.limiter) and route modules use the
same instance. Limit strings come from settings and are read per request,
so tests can change them with get_settings.cache_clear().
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from unirecords.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _search_limit() -> str:
    return get_settings().rate_limit_search


def _refresh_limit() -> str:
    return get_settings().rate_limit_refresh


limit_search = limiter.limit(_search_limit)
limit_refresh = limiter.limit(_refresh_limit)
