from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from school_events.core.errors import ValidationError
from school_events.database.db import get_db
from school_events.schemas.events import CalendarOut, EventOut
from school_events.services.events import list_calendar

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_model=CalendarOut)
def calendar_month(
    year: int | None = Query(default=None),
    month: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    """Events of one month grouped by day; defaults to the current month."""
    now = datetime.now()
    if year is None:
        year = now.year
    if month is None:
        month = now.month
    try:
        events_by_day = list_calendar(db, year, month)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": ["query", e.field], "msg": e.message, "type": "value_error"}],
        )
    return CalendarOut(
        year=year,
        month=month,
        events_by_day={
            day: [EventOut.model_validate(event) for event in day_events]
            for day, day_events in events_by_day.items()
        },
    )
