from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from school_events.core.errors import ConcurrencyConflictError, ConflictError, NotFoundError, ValidationError
from school_events.core.security import ROLE_TEACHER, require_role
from school_events.database.db import get_db
from school_events.models.events import EventType
from school_events.schemas.events import (
    EventCreate,
    EventDetailOut,
    EventFilter,
    EventOut,
    EventStatsOut,
    EventUpdate,
)
from school_events.services.events import (
    create_event,
    delete_event,
    get_event,
    get_event_stats,
    list_events,
    update_event,
)

router = APIRouter(prefix="/events", tags=["events"])


def validation_failed(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=[{"loc": ["body", e.field], "msg": e.message, "type": "value_error"}],
    )


@router.get("", response_model=list[EventOut])
def events_index(
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    event_type: EventType | None = Query(default=None, alias="type"),
    search: str | None = None,
    db: Session = Depends(get_db),
):
    event_filter = EventFilter(date_from=date_from, date_to=date_to, type=event_type, search=search)
    return list_events(db, event_filter)


@router.get("/{event_id}", response_model=EventDetailOut)
def event_details(event_id: int, db: Session = Depends(get_db)):
    try:
        return get_event(db, event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{event_id}/stats", response_model=EventStatsOut)
def event_stats(event_id: int, db: Session = Depends(get_db)):
    stats = get_event_stats(db, event_id)
    if not stats:
        raise HTTPException(status_code=404, detail="Event not found")
    return stats


@router.post("", response_model=EventOut, status_code=201, dependencies=[Depends(require_role(ROLE_TEACHER))])
def events_create(payload: EventCreate, db: Session = Depends(get_db)):
    try:
        return create_event(db, payload)
    except ValidationError as e:
        raise validation_failed(e)


@router.put("/{event_id}", response_model=EventOut, dependencies=[Depends(require_role(ROLE_TEACHER))])
def events_update(event_id: int, payload: EventUpdate, db: Session = Depends(get_db)):
    try:
        return update_event(db, event_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise validation_failed(e)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.delete("/{event_id}", status_code=204, dependencies=[Depends(require_role(ROLE_TEACHER))])
def events_delete(event_id: int, db: Session = Depends(get_db)):
    try:
        delete_event(db, event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return Response(status_code=204)
