from datetime import date, datetime, timezone

from pydantic import BaseModel, Field, field_validator

from school_events.models.events import DEFAULT_CAPACITY, MAX_CAPACITY, MIN_CAPACITY, EventType
from school_events.schemas.organizers import OrganizerOut
from school_events.schemas.registrations import RegistrationOut


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=160)
    description: str | None = Field(default=None, max_length=600)
    start_at: datetime
    end_at: datetime
    type: EventType = EventType.OTHER
    location: str | None = Field(default=None, max_length=160)
    capacity: int = Field(default=DEFAULT_CAPACITY, ge=MIN_CAPACITY, le=MAX_CAPACITY)
    organizer_id: int = Field(ge=1)

    @field_validator("start_at", "end_at")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        # Stored columns are naive; offsets are folded into UTC, naive input is taken as UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class EventUpdate(EventCreate):
    version: int | None = Field(default=None, ge=1)


class EventOut(BaseModel):
    id: int
    title: str
    description: str | None
    start_at: datetime
    end_at: datetime
    type: EventType
    location: str | None
    capacity: int
    organizer_id: int
    version: int

    class Config:
        from_attributes = True


class EventDetailOut(EventOut):
    organizer: OrganizerOut
    registrations: list[RegistrationOut]


class EventStatsOut(BaseModel):
    event_id: int
    capacity: int
    registered_count: int
    seats_left: int


class EventFilter(BaseModel):
    date_from: date | None = None
    date_to: date | None = None
    type: EventType | None = None
    search: str | None = None


class CalendarOut(BaseModel):
    year: int
    month: int
    events_by_day: dict[date, list[EventOut]]
