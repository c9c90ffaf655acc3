from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_events.database.db import Base


class Organizer(Base):
    __tablename__ = "organizers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # passive_deletes="all": deletion is guarded, never nulls out events.organizer_id
    events: Mapped[list["SchoolEvent"]] = relationship(back_populates="organizer", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version}
