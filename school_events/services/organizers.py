import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from school_events.core.errors import ConcurrencyConflictError, ConflictError, NotFoundError
from school_events.models.events import SchoolEvent
from school_events.models.organizers import Organizer
from school_events.schemas.organizers import OrganizerCreate, OrganizerUpdate

logger = logging.getLogger(__name__)


def list_organizers(db: Session) -> list[Organizer]:
    return list(db.scalars(select(Organizer).order_by(Organizer.name, Organizer.id)))


def get_organizer(db: Session, organizer_id: int) -> Organizer:
    organizer = db.get(Organizer, organizer_id)
    if organizer is None:
        raise NotFoundError("Organizer not found")
    return organizer


def create_organizer(db: Session, payload: OrganizerCreate) -> Organizer:
    organizer = Organizer(**payload.model_dump())
    db.add(organizer)
    db.commit()
    db.refresh(organizer)
    logger.info("Created organizer %s (%r)", organizer.id, organizer.name)
    return organizer


def update_organizer(db: Session, organizer_id: int, payload: OrganizerUpdate) -> Organizer:
    organizer = get_organizer(db, organizer_id)
    if payload.version is not None and payload.version != organizer.version:
        raise ConcurrencyConflictError("Organizer was modified by someone else, reload and try again.")

    for field, value in payload.model_dump(exclude={"version"}).items():
        setattr(organizer, field, value)

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if not db.scalar(select(exists().where(Organizer.id == organizer_id))):
            raise NotFoundError("Organizer not found")
        raise ConcurrencyConflictError("Organizer was modified by someone else, reload and try again.")
    db.refresh(organizer)
    return organizer


def delete_organizer(db: Session, organizer_id: int) -> None:
    organizer = get_organizer(db, organizer_id)

    has_events = db.scalar(select(exists().where(SchoolEvent.organizer_id == organizer_id)))
    if has_events:
        logger.warning("Refusing to delete organizer %s: it has events", organizer_id)
        raise ConflictError("You can't delete an organizer who has running events.")

    db.delete(organizer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("You can't delete an organizer who has running events.")
    except StaleDataError:
        db.rollback()
        raise NotFoundError("Organizer not found")
    logger.info("Deleted organizer %s", organizer_id)
