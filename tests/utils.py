"""Helpers for building database fixtures in tests."""
from datetime import date, time
from typing import Optional

from sqlalchemy.orm import Session

from edconsult.db.models import Counselor, Lead, LeadCounselor, Meeting, Student, StudentCounselor

MEETING_DAY = date(2024, 6, 1)


def add_counselor(session: Session, email: str = "priya@example.com", code: str = "COUN001",
                  name: str = "Priya Sharma") -> Counselor:
    counselor = Counselor(
        counselor_code=code,
        name=name,
        email=email,
        phone="9876543210",
        experience="5 years",
        expertise="UK admissions",
        status="Active",
    )
    session.add(counselor)
    session.commit()
    return counselor


def add_lead(session: Session, email: str = "sam@example.com", full_name: str = "Sam Lee") -> Lead:
    lead = Lead(
        full_name=full_name,
        email=email,
        phone="5550100199",
        address="12 Harbour Road, Leeds",
        interest="MSc Computing",
        status="New",
    )
    session.add(lead)
    session.commit()
    return lead


def add_student(session: Session, email: str = "mira@example.com", code: str = "STU2024001") -> Student:
    student = Student(
        student_code=code,
        first_name="Mira",
        surname="Patel",
        name="Mira Patel",
        email=email,
        mobile="5550100200",
        address="4 Canal Street, Manchester",
        status="Active",
    )
    session.add(student)
    session.commit()
    return student


def assign(session: Session, counselor: Counselor, lead: Optional[Lead] = None,
           student: Optional[Student] = None) -> None:
    if lead is not None:
        session.add(LeadCounselor(lead_id=lead.id, counselor_id=counselor.id))
    if student is not None:
        session.add(StudentCounselor(student_id=student.id, counselor_id=counselor.id))
    session.commit()


def add_meeting(session: Session, counselor: Counselor, lead: Lead, start: str, duration: int,
                day: date = MEETING_DAY, status: str = "Scheduled") -> Meeting:
    """Insert a meeting directly, bypassing the scheduler."""
    hours, minutes = (int(part) for part in start.split(":"))
    meeting = Meeting(
        counselor_id=counselor.id,
        lead_id=lead.id,
        subject_name=lead.full_name,
        meeting_date=day,
        meeting_time=time(hours, minutes),
        duration_minutes=duration,
        status=status,
    )
    session.add(meeting)
    session.commit()
    return meeting
