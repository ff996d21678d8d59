"""Staff ORM model. Employment info is flattened into columns."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unirecords.infrastructure.persistence.database import Base
from unirecords.infrastructure.persistence.models.mixins import RecordModel
from unirecords.infrastructure.persistence.models.user import User


class Staff(RecordModel, Base):
    """Staff entity. Table: staff. Links to the user account."""

    __tablename__ = "staff"

    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    staff_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    department: Mapped[str] = mapped_column(String, nullable=False)
    faculty: Mapped[str | None] = mapped_column(String, nullable=True)
    position: Mapped[str | None] = mapped_column(String, nullable=True)
    rank: Mapped[str | None] = mapped_column(String, nullable=True)

    user: Mapped[User | None] = relationship(lazy="raise")
