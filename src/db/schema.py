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
    """Only the latest snapshot of a game is kept: no history of earlier positions."""

    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    pieces: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    board: Mapped[list[list[Optional[int]]]] = mapped_column(JSON)
    turn: Mapped[str]
    turns_played: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
