"""Named counters backing display IDs (COUN001, STU2025001, ...)."""
from sqlalchemy import Column, Integer, String

from edconsult.db.base import Base


class Sequence(Base):
    __tablename__ = "sequences"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
