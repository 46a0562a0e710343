"""Counselor assignment relations for leads and students."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from edconsult.db.base import Base


class LeadCounselor(Base):
    __tablename__ = "lead_counselors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False)
    counselor_id = Column(Integer, ForeignKey("counselors.id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    lead = relationship("Lead", back_populates="assignments")
    counselor = relationship("Counselor", back_populates="lead_assignments")

    __table_args__ = (
        UniqueConstraint("lead_id", "counselor_id", name="uq_lead_counselor"),
    )


class StudentCounselor(Base):
    __tablename__ = "student_counselors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    counselor_id = Column(Integer, ForeignKey("counselors.id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    student = relationship("Student", back_populates="assignments")
    counselor = relationship("Counselor", back_populates="student_assignments")

    __table_args__ = (
        UniqueConstraint("student_id", "counselor_id", name="uq_student_counselor"),
    )
