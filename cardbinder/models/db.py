"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def _new_card_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CardDB(Base):
    """
    A catalogued card stored in the database.

    ``id`` is the insertion sequence and breaks ties between cards created
    within the same timestamp; ``card_id`` is the opaque identifier exposed
    through the API.
    """

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[str] = mapped_column(String(36), unique=True, index=True, default=_new_card_id)
    user_id: Mapped[str] = mapped_column(String(255), index=True)

    player_name: Mapped[str] = mapped_column(String(255), default="")
    card_set: Mapped[str] = mapped_column(String(255), default="")
    card_type: Mapped[str] = mapped_column(String(100), default="")
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    grading_company: Mapped[str] = mapped_column(String(50), default="")
    grade_value: Mapped[str] = mapped_column(String(50), default="")
    condition: Mapped[str] = mapped_column(String(50), default="")
    notes: Mapped[str] = mapped_column(Text, default="")

    # Media and free-form attributes stored as JSON for flexibility
    image_urls: Mapped[list[str]] = mapped_column(JSON, default=list)
    custom_attributes: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    # Legacy fields kept in sync on every save
    name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    set_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<CardDB(card_id={self.card_id}, user_id={self.user_id})>"
