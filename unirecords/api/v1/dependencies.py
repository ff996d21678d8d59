"""Presentation-layer dependency injection.

The search service is built once in the lifespan (composition root) and
stored on app.state; routes depend only on these accessors. Tests swap
them with app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends, Request

from unirecords.application.search.index_manager import IndexManager
from unirecords.application.use_cases.search import SearchService
from unirecords.domain.exceptions import SearchUnavailableException


def get_search_service(request: Request) -> SearchService:
    """Return the process search service; 503 if the lifespan has not run."""
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise SearchUnavailableException()
    return service


def get_index_manager(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> IndexManager:
    """Return the index manager behind the search service."""
    return search_svc.index_manager
