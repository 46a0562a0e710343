"""Counselor meeting model."""
from datetime import datetime, timezone as tz
from sqlalchemy import (
    Column, Integer, String, Text, Date, Time, DateTime, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship

from edconsult.db.base import Base


class Meeting(Base):
    __tablename__ = "counselor_meetings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    counselor_id = Column(Integer, ForeignKey("counselors.id", ondelete="CASCADE"), nullable=False)
    lead_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=True)
    # Snapshot of the subject at booking time; not updated on rename
    subject_name = Column(String(255), nullable=False)
    student_code = Column(String(20), nullable=True)
    meeting_date = Column(Date, nullable=False)
    meeting_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="Scheduled")
    notes = Column(Text, nullable=True)
    notes_image_path = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    counselor = relationship("Counselor", back_populates="meetings")
    lead = relationship("Lead", back_populates="meetings")
    student = relationship("Student", back_populates="meetings")

    __table_args__ = (
        Index("idx_meetings_counselor_date", "counselor_id", "meeting_date"),
        CheckConstraint(
            "(lead_id IS NULL) <> (student_id IS NULL)",
            name="ck_meeting_single_subject",
        ),
        CheckConstraint(
            "duration_minutes >= 15 AND duration_minutes <= 480",
            name="ck_meeting_duration",
        ),
        CheckConstraint(
            "status IN ('Scheduled', 'Completed', 'Cancelled')",
            name="ck_meeting_status",
        ),
    )
