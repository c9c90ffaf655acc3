import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from school_events.core.errors import ConcurrencyConflictError, ConflictError, NotFoundError, ValidationError
from school_events.models.events import MAX_CAPACITY, MIN_CAPACITY, SchoolEvent
from school_events.models.organizers import Organizer
from school_events.models.registrations import EventRegistration
from school_events.schemas.events import EventCreate, EventFilter, EventUpdate

logger = logging.getLogger(__name__)


def validate_event(db: Session, payload: EventCreate) -> None:
    """Checks that the schema alone cannot express."""
    if payload.end_at <= payload.start_at:
        raise ValidationError("end_at", "The end should be after the beginning.")
    if not MIN_CAPACITY <= payload.capacity <= MAX_CAPACITY:
        raise ValidationError("capacity", f"Capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}.")
    if db.get(Organizer, payload.organizer_id) is None:
        raise ValidationError("organizer_id", "Organizer does not exist.")


def create_event(db: Session, payload: EventCreate) -> SchoolEvent:
    validate_event(db, payload)
    event = SchoolEvent(**payload.model_dump())
    event.type = payload.type.value
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event %s (%r)", event.id, event.title)
    return event


def update_event(db: Session, event_id: int, payload: EventUpdate) -> SchoolEvent:
    event = db.get(SchoolEvent, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    if payload.version is not None and payload.version != event.version:
        raise ConcurrencyConflictError("Event was modified by someone else, reload and try again.")
    validate_event(db, payload)

    for field, value in payload.model_dump(exclude={"version"}).items():
        setattr(event, field, value)
    event.type = payload.type.value

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if not db.scalar(select(exists().where(SchoolEvent.id == event_id))):
            raise NotFoundError("Event not found")
        raise ConcurrencyConflictError("Event was modified by someone else, reload and try again.")
    db.refresh(event)
    logger.info("Updated event %s", event.id)
    return event


def delete_event(db: Session, event_id: int) -> None:
    event = db.get(SchoolEvent, event_id)
    if event is None:
        raise NotFoundError("Event not found")

    has_registrations = db.scalar(select(exists().where(EventRegistration.event_id == event_id)))
    if has_registrations:
        logger.warning("Refusing to delete event %s: it has registrations", event_id)
        raise ConflictError("You can't delete an event that has registrations.")

    db.delete(event)
    try:
        db.commit()
    except IntegrityError:
        # a registration slipped in after the check; the foreign key refused the delete
        db.rollback()
        raise ConflictError("You can't delete an event that has registrations.")
    except StaleDataError:
        db.rollback()
        raise NotFoundError("Event not found")
    logger.info("Deleted event %s", event_id)


def get_event(db: Session, event_id: int) -> SchoolEvent:
    stmt = (
        select(SchoolEvent)
        .where(SchoolEvent.id == event_id)
        .options(
            selectinload(SchoolEvent.organizer),
            selectinload(SchoolEvent.registrations).selectinload(EventRegistration.participant),
        )
    )
    event = db.scalar(stmt)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def get_event_stats(db: Session, event_id: int) -> dict:
    event = db.get(SchoolEvent, event_id)
    if not event:
        return {}

    registered_count = db.scalar(
        select(func.count(EventRegistration.id)).where(EventRegistration.event_id == event_id)
    )
    registered_count = int(registered_count or 0)

    return {
        "event_id": event.id,
        "capacity": event.capacity,
        "registered_count": registered_count,
        "seats_left": max(event.capacity - registered_count, 0),
    }


def list_events(db: Session, event_filter: EventFilter | None = None) -> list[SchoolEvent]:
    """
    Events matching every given filter field, earliest start first.

    ``date_from``/``date_to`` bound the start date inclusively at day
    granularity. ``search`` is a case-sensitive substring match against the
    title or the location.
    """
    event_filter = event_filter or EventFilter()
    stmt = select(SchoolEvent)

    if event_filter.date_from is not None:
        stmt = stmt.where(SchoolEvent.start_at >= _day_start(event_filter.date_from))
    if event_filter.date_to is not None and event_filter.date_to < date.max:
        # date.max has no following day, so it leaves the range open
        stmt = stmt.where(SchoolEvent.start_at < _day_start(event_filter.date_to + timedelta(days=1)))
    if event_filter.type is not None:
        stmt = stmt.where(SchoolEvent.type == event_filter.type.value)

    search = event_filter.search
    if search is not None and search.strip():
        # LIKE narrows the rows; case sensitivity differs per backend, so refine below
        stmt = stmt.where(
            SchoolEvent.title.contains(search, autoescape=True)
            | SchoolEvent.location.contains(search, autoescape=True)
        )
    else:
        search = None

    events = list(db.scalars(stmt.order_by(SchoolEvent.start_at, SchoolEvent.id)))
    if search is not None:
        events = [e for e in events if search in e.title or search in (e.location or "")]
    return events


def list_calendar(db: Session, year: int, month: int) -> dict[date, list[SchoolEvent]]:
    """Events starting in the given month, grouped by start date. Days without events are absent."""
    if not 1 <= month <= 12:
        raise ValidationError("month", "Month must be between 1 and 12.")
    try:
        start = datetime(year, month, 1)
    except ValueError:
        raise ValidationError("year", "Year is out of range.")

    stmt = select(SchoolEvent).where(SchoolEvent.start_at >= start)
    if month < 12:
        stmt = stmt.where(SchoolEvent.start_at < datetime(year, month + 1, 1))
    elif year < datetime.max.year:
        stmt = stmt.where(SchoolEvent.start_at < datetime(year + 1, 1, 1))
    stmt = stmt.order_by(SchoolEvent.start_at, SchoolEvent.id)

    events_by_day: dict[date, list[SchoolEvent]] = {}
    for event in db.scalars(stmt):
        events_by_day.setdefault(event.start_at.date(), []).append(event)
    return events_by_day


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)
