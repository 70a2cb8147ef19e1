"""SQLAlchemy mixins shared by the owner-scoped models."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


class SerialIdMixin:
    """Integer primary key assigned by the database sequence (monotonic)."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class OwnedMixin:
    """Owner FK to users.id; deleting the user deletes the row."""

    @declared_attr
    def user_id(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
