"""
SQLAlchemy ORM models for persistent storage.

A saved game is a single record looked up by a fixed storage key. Its
contents are opaque to the game core: prize flags are never stored, they are
recomputed from the active numbers on load.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SavedGameDB(Base):
    """
    A game session saved under a storage key.

    Cards are stored as {"id", "numbers", "start_row", "start_col"} objects,
    active numbers in the order they were toggled.
    """

    __tablename__ = "saved_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    storage_key: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    mode: Mapped[str | None] = mapped_column(String(20), nullable=True)

    cards: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    active_numbers: Mapped[list[int]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SavedGameDB(key={self.storage_key}, mode={self.mode})>"
