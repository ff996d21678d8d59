"""Persistence repositories."""

from unirecords.infrastructure.persistence.repositories.record_source_repo import (
    SqlRecordSource,
)

__all__ = ["SqlRecordSource"]
