"""Domain enumerations for the records application.

Enums represent fixed sets of domain values (entity types, document
classification, user roles). Values match the strings stored in the
record store and exposed over the API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class EntityType(_ValuesMixin, str, Enum):
    """Searchable entity collections. Each has its own search index."""

    DOCUMENT = "document"
    STUDENT = "student"
    STAFF = "staff"
    USER = "user"


class DocumentCategory(_ValuesMixin, str, Enum):
    """Top-level document classification."""

    ACADEMIC = "academic"
    ADMINISTRATIVE = "administrative"
    PERSONAL = "personal"
    FINANCIAL = "financial"
    LEGAL = "legal"
    MEDICAL = "medical"
    RESEARCH = "research"


class DocumentAccessLevel(_ValuesMixin, str, Enum):
    """Document access level for authorization and advanced search filters."""

    PUBLIC = "public"
    RESTRICTED = "restricted"
    CONFIDENTIAL = "confidential"
    CLASSIFIED = "classified"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Document review lifecycle status."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending-review"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"


class UserRole(_ValuesMixin, str, Enum):
    """User account role."""

    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"
    SYSTEM_ADMIN = "system-admin"
