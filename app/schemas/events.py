from datetime import datetime, timedelta, timezone
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


# ---------- Event ----------
class EventEditor(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    description: str
    start: datetime
    end: datetime
    time_zone: str = Field(min_length=1)
    organizer_name: str = Field(min_length=1, max_length=128)
    organizer_email: str = Field(min_length=1, max_length=128)
    max_token_cap: int | None = Field(default=None, ge=0)
    daily_request_cap: int | None = Field(default=None, ge=0)
    active: bool = True
    shared_code: str | None = Field(default=None, max_length=64)
    image_url: str | None = Field(default=None, max_length=256)

    @field_validator("shared_code", "image_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("start", "end")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_validator("time_zone")
    @classmethod
    def known_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone {value!r}")
        return value

    @property
    def time_zone_label(self) -> str:
        return self.time_zone

    def time_zone_offset_minutes(self) -> int:
        """
        Standard UTC offset of the selected zone in the event's year, in minutes.

        The smaller of the January and July offsets. Zones whose tzdata models
        winter as negative DST (Europe/Dublin) report a misleading dst().
        """
        zone = ZoneInfo(self.time_zone)
        year = self.start.year
        offsets = [datetime(year, month, 1, tzinfo=zone).utcoffset() or timedelta(0) for month in (1, 7)]
        return int(min(offsets).total_seconds() // 60)


class EventModelsUpdate(BaseModel):
    model_ids: list[UUID]


class CatalogOut(BaseModel):
    catalog_id: UUID
    deployment_name: str
    friendly_name: str
    model_type: str | None
    location: str | None
    active: bool

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    event_id: str
    event_code: str
    event_shared_code: str | None
    event_image_url: str | None
    event_markdown: str
    start_timestamp: datetime
    end_timestamp: datetime
    time_zone_offset: int
    time_zone_label: str
    organizer_name: str
    organizer_email: str
    max_token_cap: int | None
    daily_request_cap: int | None
    active: bool
    catalogs: list[CatalogOut] = []

    class Config:
        from_attributes = True
