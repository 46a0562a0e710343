"""Counselor model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from edconsult.db.base import Base


class Counselor(Base):
    __tablename__ = "counselors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    counselor_code = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=False)
    experience = Column(String(100), nullable=False)
    expertise = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="Active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    meetings = relationship("Meeting", back_populates="counselor", cascade="all, delete-orphan")
    lead_assignments = relationship("LeadCounselor", back_populates="counselor", cascade="all, delete-orphan")
    student_assignments = relationship("StudentCounselor", back_populates="counselor", cascade="all, delete-orphan")
