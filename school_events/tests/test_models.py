"""
Test database models (Organizer, SchoolEvent, Participant, EventRegistration).
"""
from datetime import datetime

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from school_events.models.events import EventType, SchoolEvent
from school_events.models.organizers import Organizer
from school_events.models.participants import Participant
from school_events.models.registrations import EventRegistration


class TestSchoolEventModel:
    """Test the SchoolEvent model."""

    def test_create_event_defaults(self, db_session: Session, organizer: Organizer):
        """Test that type and capacity fall back to their defaults."""
        event = SchoolEvent(
            title="Parents meeting",
            start_at=datetime(2025, 9, 1, 18, 0),
            end_at=datetime(2025, 9, 1, 19, 0),
            organizer_id=organizer.id,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.id is not None
        assert event.type == EventType.OTHER.value
        assert event.capacity == 30
        assert event.version == 1

    def test_event_relationship_with_organizer(self, db_session: Session, make_event):
        """Test the relationship between SchoolEvent and Organizer."""
        event = make_event()

        assert event.organizer.name == "Maria Petrova"
        db_session.refresh(event.organizer)
        assert [e.id for e in event.organizer.events] == [event.id]

    def test_version_increments_on_update(self, db_session: Session, make_event):
        """Test that every flushed update bumps the version counter."""
        event = make_event()

        event.title = "Football final"
        db_session.commit()
        db_session.refresh(event)

        assert event.version == 2


class TestEventRegistrationModel:
    """Test the EventRegistration model."""

    def test_create_registration(self, db_session: Session, make_event):
        """Test creating a registration."""
        event = make_event()
        participant = Participant(full_name="Ivan Ivanov", email="ivan@school.com", class_name="10B")
        db_session.add(participant)
        db_session.commit()

        registration = EventRegistration(event_id=event.id, participant_id=participant.id)
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)

        assert registration.id is not None
        assert registration.registered_at is not None
        assert registration.event.title == "Football tournament"
        assert registration.participant.full_name == "Ivan Ivanov"

    def test_event_with_registrations_is_protected_by_foreign_key(self, db_session: Session, make_event):
        """Test that the store refuses to drop an event that still has registrations."""
        event = make_event()
        participant = Participant(full_name="Ivan Ivanov")
        db_session.add(participant)
        db_session.commit()
        db_session.add(EventRegistration(event_id=event.id, participant_id=participant.id))
        db_session.commit()

        with pytest.raises(IntegrityError):
            db_session.execute(delete(SchoolEvent).where(SchoolEvent.id == event.id))
        db_session.rollback()

    def test_organizer_with_events_is_protected_by_foreign_key(
        self, db_session: Session, make_event, organizer: Organizer
    ):
        """Test that the store refuses to drop an organizer that still owns events."""
        make_event()

        with pytest.raises(IntegrityError):
            db_session.execute(delete(Organizer).where(Organizer.id == organizer.id))
        db_session.rollback()
