"""Lead, follow-up and change-tracking models."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from edconsult.db.base import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=False)
    address = Column(Text, nullable=False)
    interest = Column(String(255), nullable=False)
    comments = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="New")
    is_follow_up = Column(Boolean, nullable=False, default=False)
    is_registered = Column(Boolean, nullable=False, default=False)
    registered_at = Column(DateTime(timezone=True), nullable=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz.utc),
        onupdate=lambda: datetime.now(tz.utc),
    )

    # Relationships
    follow_ups = relationship(
        "FollowUp", back_populates="lead", cascade="all, delete-orphan", order_by="FollowUp.follow_up_number"
    )
    changes = relationship("LeadChange", back_populates="lead", cascade="all, delete-orphan")
    assignments = relationship("LeadCounselor", back_populates="lead", cascade="all, delete-orphan")
    meetings = relationship("Meeting", back_populates="lead", cascade="all, delete-orphan")


class FollowUp(Base):
    __tablename__ = "follow_ups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False)
    follow_up_number = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    followed_up_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    lead = relationship("Lead", back_populates="follow_ups")
    changes = relationship("LeadChange", back_populates="follow_up")

    __table_args__ = (
        Index("idx_follow_ups_lead", "lead_id"),
    )


class LeadChange(Base):
    __tablename__ = "lead_changes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False)
    follow_up_id = Column(Integer, ForeignKey("follow_ups.id", ondelete="CASCADE"), nullable=True)
    field_name = Column(String(50), nullable=False)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    changed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    lead = relationship("Lead", back_populates="changes")
    follow_up = relationship("FollowUp", back_populates="changes")

    __table_args__ = (
        Index("idx_lead_changes_lead", "lead_id"),
    )
