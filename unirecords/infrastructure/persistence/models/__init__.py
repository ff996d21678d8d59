"""Persistence models: ORM entities and mixins."""

from unirecords.infrastructure.persistence.models.document import Document
from unirecords.infrastructure.persistence.models.mixins import (
    ActiveMixin,
    CuidMixin,
    RecordModel,
    TimestampMixin,
)
from unirecords.infrastructure.persistence.models.staff import Staff
from unirecords.infrastructure.persistence.models.student import Student
from unirecords.infrastructure.persistence.models.user import User

__all__ = [
    "ActiveMixin",
    "CuidMixin",
    "Document",
    "RecordModel",
    "Staff",
    "Student",
    "TimestampMixin",
    "User",
]
