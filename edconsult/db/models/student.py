"""Student model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from edconsult.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_code = Column(String(20), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    surname = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)  # display name: first [middle] surname
    email = Column(String(255), unique=True, nullable=False, index=True)
    mobile = Column(String(30), nullable=False)
    address = Column(Text, nullable=False)
    country = Column(String(100), nullable=True)
    dob = Column(Date, nullable=True)
    guardian_name = Column(String(150), nullable=True)
    guardian_relation = Column(String(50), nullable=True)
    guardian_mobile = Column(String(30), nullable=True)
    guardian_email = Column(String(255), nullable=True)
    source_inquiry = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="Active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    user = relationship("User")
    assignments = relationship("StudentCounselor", back_populates="student", cascade="all, delete-orphan")
    meetings = relationship("Meeting", back_populates="student", cascade="all, delete-orphan")
