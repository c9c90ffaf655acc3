from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_events.database.db import Base


class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    full_name: Mapped[str] = mapped_column(String(120), nullable=False)
    # Not unique: lookup by email is advisory only
    email: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    class_name: Mapped[str | None] = mapped_column(String(20), nullable=True)

    registrations: Mapped[list["EventRegistration"]] = relationship(
        back_populates="participant", passive_deletes=True
    )
