import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.db import Base

event_catalog_map = Table(
    "event_catalog_map",
    Base.metadata,
    Column("event_id", ForeignKey("event.event_id", ondelete="CASCADE"), primary_key=True),
    Column("catalog_id", ForeignKey("owner_catalog.catalog_id", ondelete="CASCADE"), primary_key=True),
)


class Owner(Base):
    __tablename__ = "owner"

    owner_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(String(128), nullable=True)

    event_maps: Mapped[list["OwnerEventMap"]] = relationship(back_populates="owner")
    catalogs: Mapped[list["OwnerCatalog"]] = relationship(back_populates="owner")


class OwnerEventMap(Base):
    __tablename__ = "owner_event_map"

    owner_id: Mapped[str] = mapped_column(ForeignKey("owner.owner_id"), primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("event.event_id", ondelete="CASCADE"), primary_key=True)
    creator: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped["Owner"] = relationship(back_populates="event_maps")
    event: Mapped["Event"] = relationship(back_populates="owner_event_maps")


class OwnerCatalog(Base):
    __tablename__ = "owner_catalog"

    catalog_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(ForeignKey("owner.owner_id"), nullable=False)
    deployment_name: Mapped[str] = mapped_column(String(64), nullable=False)
    friendly_name: Mapped[str] = mapped_column(String(64), nullable=False)
    model_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped["Owner"] = relationship(back_populates="catalogs")
    events: Mapped[list["Event"]] = relationship(secondary=event_catalog_map, back_populates="catalogs")


class Event(Base):
    __tablename__ = "event"

    event_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    event_code: Mapped[str] = mapped_column(String(64), nullable=False)
    event_shared_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    event_image_url: Mapped[str | None] = mapped_column(String(256), nullable=True)
    event_markdown: Mapped[str] = mapped_column(Text, nullable=False)
    start_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # display only: standard offset of the selected zone, in minutes, captured at write time
    time_zone_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    time_zone_label: Mapped[str] = mapped_column(String(64), nullable=False)
    organizer_name: Mapped[str] = mapped_column(String(128), nullable=False)
    organizer_email: Mapped[str] = mapped_column(String(128), nullable=False)
    max_token_cap: Mapped[int | None] = mapped_column(Integer, nullable=True)
    daily_request_cap: Mapped[int | None] = mapped_column(Integer, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner_event_maps: Mapped[list["OwnerEventMap"]] = relationship(
        back_populates="event", cascade="all, delete-orphan"
    )
    catalogs: Mapped[list["OwnerCatalog"]] = relationship(secondary=event_catalog_map, back_populates="events")
