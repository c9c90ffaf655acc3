import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_events.database.db import Base


class EventType(str, enum.Enum):
    SPORTS = "Sports"
    ACADEMIC = "Academic"
    CULTURAL = "Cultural"
    EXCURSION = "Excursion"
    COMPETITION = "Competition"
    MEETING = "Meeting"
    OTHER = "Other"


DEFAULT_CAPACITY = 30
MIN_CAPACITY = 1
MAX_CAPACITY = 500


class SchoolEvent(Base):
    __tablename__ = "school_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str | None] = mapped_column(String(600), nullable=True)
    start_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    end_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default=EventType.OTHER.value)
    location: Mapped[str | None] = mapped_column(String(160), nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_CAPACITY)
    organizer_id: Mapped[int] = mapped_column(
        ForeignKey("organizers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    organizer: Mapped["Organizer"] = relationship(back_populates="events")
    registrations: Mapped[list["EventRegistration"]] = relationship(
        back_populates="event", passive_deletes="all"
    )

    __mapper_args__ = {"version_id_col": version}
