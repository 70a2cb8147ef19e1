"""User ORM model for authentication."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from linkvault.infrastructure.persistence.database import Base
from linkvault.infrastructure.persistence.models.mixins import SerialIdMixin


class User(SerialIdMixin, Base):
    """User model. Table: users. Username and email are globally unique."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(256), nullable=False)

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )
