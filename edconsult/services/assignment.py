"""Counselor assignment relations and subject lookup."""
from dataclasses import dataclass
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from edconsult.core.constants import SUBJECT_LEAD, SUBJECT_STUDENT
from edconsult.core.exceptions import ConflictError, NotFoundError, ValidationError
from edconsult.core.logging_config import get_logger
from edconsult.db import transaction
from edconsult.db.models import Counselor, Lead, LeadCounselor, Student, StudentCounselor

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubjectRef:
    """The lead or student a meeting or assignment concerns."""
    kind: str
    id: int

    def __post_init__(self):
        if self.kind not in (SUBJECT_LEAD, SUBJECT_STUDENT):
            raise ValidationError(f"Unknown subject type '{self.kind}'")


def _relation(subject: SubjectRef):
    """Return (assignment model, subject FK column) for the subject kind."""
    if subject.kind == SUBJECT_LEAD:
        return LeadCounselor, LeadCounselor.lead_id
    return StudentCounselor, StudentCounselor.student_id


def _find_assignment(db: Session, counselor_id: int, subject: SubjectRef):
    model, subject_column = _relation(subject)
    return (
        db.query(model)
        .filter(subject_column == subject.id, model.counselor_id == counselor_id)
        .first()
    )


def is_assigned(db: Session, counselor_id: int, subject: SubjectRef) -> bool:
    """Check whether the counselor is currently assigned to the subject."""
    return _find_assignment(db, counselor_id, subject) is not None


def get_subject(db: Session, subject: SubjectRef) -> Tuple[str, Optional[str]]:
    """
    Look up a subject's display name.

    Returns:
        (display name, student code or None for leads)

    Raises:
        NotFoundError: If the lead or student does not exist
    """
    if subject.kind == SUBJECT_LEAD:
        lead = db.query(Lead).filter(Lead.id == subject.id).first()
        if not lead:
            raise NotFoundError("Lead not found")
        return lead.full_name, None

    student = db.query(Student).filter(Student.id == subject.id).first()
    if not student:
        raise NotFoundError("Student not found")
    return student.name, student.student_code


def assign_counselor(db: Session, counselor_id: Optional[int], subject: SubjectRef) -> None:
    """Assign a counselor to a lead or student."""
    if not counselor_id:
        raise ValidationError("Counselor ID is required")

    with transaction(db):
        get_subject(db, subject)

        if not db.query(Counselor).filter(Counselor.id == counselor_id).first():
            raise NotFoundError("Counselor not found")

        if _find_assignment(db, counselor_id, subject):
            raise ConflictError(f"This counselor is already assigned to this {subject.kind}")

        model, _ = _relation(subject)
        if subject.kind == SUBJECT_LEAD:
            db.add(model(lead_id=subject.id, counselor_id=counselor_id))
        else:
            db.add(model(student_id=subject.id, counselor_id=counselor_id))

    logger.info("counselor_assigned", counselor_id=counselor_id, subject_kind=subject.kind, subject_id=subject.id)


def unassign_counselor(db: Session, counselor_id: int, subject: SubjectRef) -> None:
    """Remove a counselor assignment. Existing meetings are kept."""
    with transaction(db):
        assignment = _find_assignment(db, counselor_id, subject)
        if not assignment:
            raise NotFoundError("Assignment not found")
        db.delete(assignment)

    logger.info("counselor_unassigned", counselor_id=counselor_id, subject_kind=subject.kind, subject_id=subject.id)


def get_assigned_counselors(db: Session, subject: SubjectRef) -> List[dict]:
    """Counselors assigned to a subject, most recent assignment first."""
    model, subject_column = _relation(subject)
    rows = (
        db.query(Counselor, model.assigned_at)
        .join(model, model.counselor_id == Counselor.id)
        .filter(subject_column == subject.id)
        .order_by(model.assigned_at.desc())
        .all()
    )
    return [
        {
            "id": counselor.id,
            "counselor_code": counselor.counselor_code,
            "name": counselor.name,
            "email": counselor.email,
            "phone": counselor.phone,
            "assigned_at": assigned_at,
        }
        for counselor, assigned_at in rows
    ]
