from datetime import datetime

from pydantic import BaseModel, Field


# ---------- Participant ----------
class ParticipantIn(BaseModel):
    full_name: str = Field(min_length=1, max_length=120)
    email: str | None = Field(default=None, max_length=120)
    class_name: str | None = Field(default=None, max_length=20)


class ParticipantOut(BaseModel):
    id: int
    full_name: str
    email: str | None
    class_name: str | None

    class Config:
        from_attributes = True


# ---------- Registration ----------
class RegistrationOut(BaseModel):
    id: int
    event_id: int
    participant: ParticipantOut
    registered_at: datetime

    class Config:
        from_attributes = True


class RegisteredEventOut(BaseModel):
    id: int
    title: str
    start_at: datetime

    class Config:
        from_attributes = True


class RegistrationListItem(RegistrationOut):
    event: RegisteredEventOut


class RegistrationResultOut(BaseModel):
    status: str
    message: str
    event_id: int
    registration: RegistrationOut | None = None
