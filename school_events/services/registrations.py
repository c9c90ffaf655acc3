import enum
import logging
from dataclasses import dataclass

import redis
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from school_events.core.config import get_lock_timeouts, get_redis_url
from school_events.core.errors import ConcurrencyConflictError
from school_events.models.events import SchoolEvent
from school_events.models.participants import Participant
from school_events.models.registrations import EventRegistration
from school_events.schemas.registrations import ParticipantIn

logger = logging.getLogger(__name__)


class RegistrationStatus(str, enum.Enum):
    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    EVENT_NOT_FOUND = "event_not_found"


@dataclass
class RegistrationResult:
    status: RegistrationStatus
    message: str
    event_id: int
    registration: EventRegistration | None = None


def get_redis_client():
    """Get Redis client for locking."""
    return redis.from_url(get_redis_url(), decode_responses=True)


def normalize_email(email: str | None) -> str | None:
    if email is None or not email.strip():
        return None
    return email.strip().lower()


def register(db: Session, *, event_id: int, participant_in: ParticipantIn) -> RegistrationResult:
    """
    Register a participant to an event while holding a per-event Redis lock,
    so the capacity count and the insert cannot interleave with another
    registration for the same event.
    """
    redis_client = get_redis_client()
    timeout, blocking_timeout = get_lock_timeouts()
    lock = redis_client.lock(f"event_lock:{event_id}", timeout=timeout, blocking_timeout=blocking_timeout)

    try:
        acquired = lock.acquire(blocking=True, blocking_timeout=blocking_timeout)
    except redis.exceptions.LockError:
        acquired = False
    if not acquired:
        raise ConcurrencyConflictError("Registration is busy for this event, please try again.")

    try:
        result = _register_in_transaction(db, event_id, participant_in)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        try:
            lock.release()
        except redis.exceptions.LockNotOwnedError:
            logger.warning("Registration lock for event %s expired before release", event_id)

    if result.registration is not None:
        db.refresh(result.registration)
    return result


def _register_in_transaction(db: Session, event_id: int, participant_in: ParticipantIn) -> RegistrationResult:
    """Internal function to register within a transaction."""
    # Row lock on the event where the backend supports it
    event = db.scalar(select(SchoolEvent).where(SchoolEvent.id == event_id).with_for_update())
    if event is None:
        return RegistrationResult(RegistrationStatus.EVENT_NOT_FOUND, "Event not found.", event_id)

    current_count = db.scalar(
        select(func.count(EventRegistration.id)).where(EventRegistration.event_id == event_id)
    )
    if current_count >= event.capacity:
        logger.warning("Event %s is full (%s/%s)", event_id, current_count, event.capacity)
        return RegistrationResult(
            RegistrationStatus.CAPACITY_EXCEEDED, "There are no available seats for this event.", event_id
        )

    participant = _resolve_participant(db, participant_in)

    already = db.scalar(
        select(EventRegistration.id).where(
            EventRegistration.event_id == event_id,
            EventRegistration.participant_id == participant.id,
        )
    )
    if already is not None:
        logger.info("Participant %s already registered for event %s", participant.id, event_id)
        return RegistrationResult(
            RegistrationStatus.ALREADY_REGISTERED, "You're already registered for this event.", event_id
        )

    registration = EventRegistration(event_id=event_id, participant_id=participant.id)
    db.add(registration)
    db.flush()
    logger.info("Registered participant %s for event %s", participant.id, event_id)
    return RegistrationResult(RegistrationStatus.REGISTERED, "Successful registration!", event_id, registration)


def _resolve_participant(db: Session, participant_in: ParticipantIn) -> Participant:
    email = normalize_email(participant_in.email)
    if email is not None:
        existing = db.scalar(
            select(Participant).where(Participant.email == email).order_by(Participant.id).limit(1)
        )
        if existing is not None:
            return existing

    participant = Participant(
        full_name=participant_in.full_name,
        email=email,
        class_name=participant_in.class_name,
    )
    db.add(participant)
    db.flush()  # gets participant.id
    return participant


def list_registrations(db: Session) -> list[EventRegistration]:
    stmt = (
        select(EventRegistration)
        .options(selectinload(EventRegistration.event), selectinload(EventRegistration.participant))
        .order_by(EventRegistration.registered_at.desc(), EventRegistration.id.desc())
    )
    return list(db.scalars(stmt))
