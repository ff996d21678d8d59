"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from unirecords.application.dtos.records import (
        DocumentRecord,
        StaffRecord,
        StudentRecord,
        UserRecord,
    )


# Record source interface (read-only snapshots for search index builds)
class IRecordSource(Protocol):
    """Protocol for the record store consumed by index builds (DIP).

    Each method returns the full current listing of active records for one
    entity type, with cross-referenced display fields populated.
    """

    async def list_active_documents(self) -> Sequence[DocumentRecord]:
        """Return documents that are active and not archived, with uploader profile."""

    async def list_active_students(self) -> Sequence[StudentRecord]:
        """Return active students with linked user name and email."""

    async def list_active_staff(self) -> Sequence[StaffRecord]:
        """Return active staff with linked user name and email."""

    async def list_active_users(self) -> Sequence[UserRecord]:
        """Return active users (no credentials)."""
