from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all records."""


class InsertionOrderMixin:
    """Adds a ``created_at`` column set by the database on insert.

    ``SQLAlchemyRepository.list`` orders records by this column, so
    collections come back in the order their objects were first saved.
    Later merges of the same key leave it unchanged.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
