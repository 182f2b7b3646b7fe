"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column



def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    players: Mapped[list[dict[str, Any]]] = mapped_column(JSON)
    current_player: Mapped[int]
    used_words: Mapped[list[str]] = mapped_column(JSON, default=list)
    last_word: Mapped[str] = mapped_column(default="")
    status: Mapped[str]
    winner: Mapped[Optional[int]]
    pending: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    target_score: Mapped[Optional[int]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
