"""Student ORM model. Academic info is flattened into columns."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unirecords.infrastructure.persistence.database import Base
from unirecords.infrastructure.persistence.models.mixins import RecordModel
from unirecords.infrastructure.persistence.models.user import User


class Student(RecordModel, Base):
    """Student entity. Table: student. Links to the user account."""

    __tablename__ = "student"

    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    registration_number: Mapped[str] = mapped_column(
        String, nullable=False, unique=True
    )
    faculty: Mapped[str] = mapped_column(String, nullable=False)
    department: Mapped[str] = mapped_column(String, nullable=False)
    program: Mapped[str | None] = mapped_column(String, nullable=True)
    level: Mapped[str | None] = mapped_column(String, nullable=True)
    academic_status: Mapped[str | None] = mapped_column(String, nullable=True)

    user: Mapped[User | None] = relationship(lazy="raise")
