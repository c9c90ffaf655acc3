from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from school_events.core.errors import ConcurrencyConflictError
from school_events.core.security import ROLE_STUDENT, ROLE_TEACHER, require_role
from school_events.database.db import get_db
from school_events.schemas.registrations import (
    ParticipantIn,
    RegistrationListItem,
    RegistrationOut,
    RegistrationResultOut,
)
from school_events.services.registrations import RegistrationStatus, list_registrations, register

router = APIRouter(tags=["registrations"])


@router.post(
    "/events/{event_id}/registrations",
    response_model=RegistrationResultOut,
    status_code=201,
    dependencies=[Depends(require_role(ROLE_STUDENT))],
)
def register_participant(event_id: int, payload: ParticipantIn, response: Response, db: Session = Depends(get_db)):
    try:
        result = register(db, event_id=event_id, participant_in=payload)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)

    if result.status == RegistrationStatus.EVENT_NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.message)
    if result.status == RegistrationStatus.CAPACITY_EXCEEDED:
        raise HTTPException(status_code=409, detail=result.message)
    if result.status == RegistrationStatus.ALREADY_REGISTERED:
        response.status_code = 200

    return RegistrationResultOut(
        status=result.status.value,
        message=result.message,
        event_id=result.event_id,
        registration=RegistrationOut.model_validate(result.registration) if result.registration else None,
    )


@router.get(
    "/registrations",
    response_model=list[RegistrationListItem],
    dependencies=[Depends(require_role(ROLE_TEACHER))],
)
def registrations_index(db: Session = Depends(get_db)):
    return list_registrations(db)
