from pydantic import BaseModel, Field


# ---------- Organizer ----------
class OrganizerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str | None = Field(default=None, max_length=120)
    phone: str | None = Field(default=None, max_length=30)
    department: str | None = Field(default=None, max_length=200)


class OrganizerUpdate(OrganizerCreate):
    version: int | None = Field(default=None, ge=1)


class OrganizerOut(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    department: str | None
    version: int

    class Config:
        from_attributes = True
