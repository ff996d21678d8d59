"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from unirecords.domain.enums import (
    DocumentAccessLevel,
    DocumentCategory,
    DocumentStatus,
    EntityType,
    UserRole,
)
from unirecords.domain.exceptions import (
    RecordsException,
    ResourceNotFoundException,
    SearchUnavailableException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "DocumentAccessLevel",
    "DocumentCategory",
    "DocumentStatus",
    "EntityType",
    "UserRole",
    # Exceptions
    "RecordsException",
    "ResourceNotFoundException",
    "SearchUnavailableException",
    "SqlNotConfiguredException",
    "ValidationException",
]
