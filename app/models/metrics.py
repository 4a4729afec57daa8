from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.db import Base
from app.models.events import Event


class EventAttendee(Base):
    """Registered participant of an event. Written by the attendee registration flow."""

    __tablename__ = "event_attendee"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("event.event_id"), primary_key=True)
    api_key: Mapped[str | None] = mapped_column(String(64), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    event: Mapped["Event"] = relationship()


class MetricRecord(Base):
    """One proxied request. Append-only, written by the metering pipeline."""

    __tablename__ = "metric"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("event.event_id"), nullable=False, index=True)
    api_key: Mapped[str] = mapped_column(String(64), nullable=False)
    time_stamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    resource: Mapped[str] = mapped_column(String(64), nullable=False)
    prompt_tokens: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completion_tokens: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_tokens: Mapped[int | None] = mapped_column(Integer, nullable=True)
