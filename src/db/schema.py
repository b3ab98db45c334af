"""Database tables / schema"""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.models import utc_now


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[str] = mapped_column(primary_key=True)
    players: Mapped[list[Optional[str]]] = mapped_column(JSON)
    board: Mapped[list[list[Optional[str]]]] = mapped_column(JSON)
    active_player: Mapped[Optional[str]]
    ended: Mapped[bool] = mapped_column(default=False)
    status: Mapped[str]
    ended_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
