"""Infrastructure exceptions for record store operations.

Record store errors extend RecordsException so presentation can map them
to HTTP responses consistently.
"""

from unirecords.domain.exceptions import RecordsException


class RecordSourceException(RecordsException):
    """Listing records from the store failed (connection, query or mapping error)."""

    def __init__(self, entity_type: str, reason: str) -> None:
        super().__init__(
            f"Failed to load {entity_type} records: {reason}",
            "RECORD_SOURCE_ERROR",
            {"entity_type": entity_type, "reason": reason},
        )
