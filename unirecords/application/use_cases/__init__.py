"""Application use cases."""

from unirecords.application.use_cases.search import SearchService

__all__ = ["SearchService"]
