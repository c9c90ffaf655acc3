from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from school_events.core.errors import ConcurrencyConflictError, ConflictError, NotFoundError
from school_events.core.security import ROLE_TEACHER, require_role
from school_events.database.db import get_db
from school_events.schemas.organizers import OrganizerCreate, OrganizerOut, OrganizerUpdate
from school_events.services.organizers import (
    create_organizer,
    delete_organizer,
    get_organizer,
    list_organizers,
    update_organizer,
)

router = APIRouter(
    prefix="/organizers",
    tags=["organizers"],
    dependencies=[Depends(require_role(ROLE_TEACHER))],
)


@router.get("", response_model=list[OrganizerOut])
def organizers_index(db: Session = Depends(get_db)):
    return list_organizers(db)


@router.get("/{organizer_id}", response_model=OrganizerOut)
def organizer_details(organizer_id: int, db: Session = Depends(get_db)):
    try:
        return get_organizer(db, organizer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("", response_model=OrganizerOut, status_code=201)
def organizers_create(payload: OrganizerCreate, db: Session = Depends(get_db)):
    return create_organizer(db, payload)


@router.put("/{organizer_id}", response_model=OrganizerOut)
def organizers_update(organizer_id: int, payload: OrganizerUpdate, db: Session = Depends(get_db)):
    try:
        return update_organizer(db, organizer_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.delete("/{organizer_id}", status_code=204)
def organizers_delete(organizer_id: int, db: Session = Depends(get_db)):
    try:
        delete_organizer(db, organizer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return Response(status_code=204)
