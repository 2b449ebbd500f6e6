"""Declarative base and shared column mixins."""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Creation and last-update timestamps, both assigned by the database."""

    created_at: Mapped[datetime] = mapped_column(
        "data_criacao",
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        "data_atualizacao",
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
