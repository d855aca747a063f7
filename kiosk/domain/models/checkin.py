"""Check-in domain model — maps to the 'checkins' table."""

from sqlalchemy import Column, Integer, String, Text

from kiosk.infrastructure.database import Base


class CheckIn(Base):
    __tablename__ = "checkins"
    # ids are never reused, even after the table is cleared
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    whatsapp = Column(Text, nullable=False)
    profile = Column(String(20), nullable=False)  # CASAL, SOLTEIRO
    # ISO 8601 UTC string, e.g. 2026-10-16T22:15:03.120Z
    created_at = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<CheckIn {self.id} - {self.name}>"
