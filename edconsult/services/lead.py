"""Lead capture, follow-up tracking and conversion to students."""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from edconsult.core.constants import SUBJECT_LEAD
from edconsult.core.exceptions import ConflictError, NotFoundError, ValidationError
from edconsult.core.logging_config import get_logger
from edconsult.db import transaction
from edconsult.db.models import FollowUp, Lead, LeadChange
from edconsult.schemas.lead import LeadCreate, LeadUpdate
from edconsult.services.assignment import SubjectRef, get_assigned_counselors
from edconsult.services.meeting import list_meetings
from edconsult.services.student import add_student_record

logger = get_logger(__name__)

# Fields compared on every follow-up: (schema attribute, column name)
TRACKED_FIELDS = (
    ("full_name", "full_name"),
    ("email", "email"),
    ("phone", "phone"),
    ("address", "address"),
    ("interest", "interest"),
    ("comments", "comments"),
)


def lead_to_dict(lead: Lead, follow_up_count: int = 0, last_follow_up: Optional[datetime] = None) -> Dict:
    """Serialize a lead row."""
    return {
        "id": lead.id,
        "full_name": lead.full_name,
        "email": lead.email,
        "phone": lead.phone,
        "address": lead.address,
        "interest": lead.interest,
        "comments": lead.comments,
        "status": lead.status,
        "is_follow_up": lead.is_follow_up,
        "is_registered": lead.is_registered,
        "registered_at": lead.registered_at,
        "student_id": lead.student_id,
        "follow_up_count": follow_up_count,
        "last_follow_up": last_follow_up,
        "created_at": lead.created_at,
        "updated_at": lead.updated_at,
    }


def _lead_query(db: Session):
    return (
        db.query(Lead, func.count(FollowUp.id), func.max(FollowUp.followed_up_at))
        .outerjoin(FollowUp, FollowUp.lead_id == Lead.id)
        .group_by(Lead.id)
    )


def _get_or_404(db: Session, lead_id: int, message: str = "Lead not found") -> Lead:
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if not lead:
        raise NotFoundError(message)
    return lead


def _ensure_email_free(db: Session, email: str, exclude_lead_id: Optional[int] = None, message: str = "") -> None:
    query = db.query(Lead.id).filter(Lead.email == email)
    if exclude_lead_id is not None:
        query = query.filter(Lead.id != exclude_lead_id)
    if query.first():
        raise ConflictError(message or "This email address is already associated with another lead")


def create_lead(db: Session, data: LeadCreate) -> Lead:
    """Capture a first-time inquiry."""
    with transaction(db):
        _ensure_email_free(
            db,
            data.email,
            message=(
                "A lead with this email address already exists. "
                "Please use the Follow Up option to update your information."
            ),
        )

        lead = Lead(
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            interest=data.interest,
            comments=data.comments,
            is_follow_up=False,
            status="New",
        )
        db.add(lead)
        db.flush()

    logger.info("lead_created", lead_id=lead.id)
    return lead


def lookup_lead(db: Session, full_name: str, email: str) -> Dict:
    """Find a lead by case-insensitive name and email."""
    row = (
        _lead_query(db)
        .filter(
            func.lower(func.trim(Lead.full_name)) == full_name.strip().lower(),
            func.lower(func.trim(Lead.email)) == email.strip().lower(),
        )
        .order_by(Lead.created_at.desc())
        .first()
    )
    if not row:
        raise NotFoundError(
            "No record found with the provided name and email. "
            "Please check your information or submit a new registration."
        )
    lead, count, last = row
    return lead_to_dict(lead, count, last)


def _as_text(value) -> str:
    return "" if value is None else str(value).strip()


def record_follow_up(db: Session, lead_id: int, data: LeadCreate) -> Tuple[int, int]:
    """
    Record a follow-up submission and the fields it changed.

    Returns:
        (follow-up number, number of changed fields)
    """
    with transaction(db):
        lead = _get_or_404(db, lead_id, "Lead record not found")

        if data.email != lead.email.lower():
            _ensure_email_free(
                db,
                data.email,
                exclude_lead_id=lead_id,
                message=(
                    "This email address is already associated with another record. "
                    "Please use a different email."
                ),
            )

        number = db.query(func.count(FollowUp.id)).filter(FollowUp.lead_id == lead_id).scalar() + 1
        follow_up = FollowUp(
            lead_id=lead_id,
            follow_up_number=number,
            notes=f"Follow-up #{number} - Updated information",
        )
        db.add(follow_up)
        db.flush()

        changes = []
        for attribute, column in TRACKED_FIELDS:
            old_value = getattr(lead, column)
            new_value = getattr(data, attribute)
            if _as_text(old_value) != _as_text(new_value):
                changes.append(LeadChange(
                    lead_id=lead_id,
                    follow_up_id=follow_up.id,
                    field_name=column,
                    old_value=old_value,
                    new_value=new_value,
                ))
        db.add_all(changes)

        lead.full_name = data.full_name
        lead.email = data.email
        lead.phone = data.phone
        lead.address = data.address
        lead.interest = data.interest
        lead.comments = data.comments
        lead.is_follow_up = True

    logger.info("lead_follow_up_recorded", lead_id=lead_id, follow_up_number=number, changes=len(changes))
    return number, len(changes)


def get_lead_history(db: Session, lead_id: int) -> Dict:
    """A lead with its follow-ups and field changes, newest first."""
    lead = _get_or_404(db, lead_id)

    follow_ups = (
        db.query(FollowUp)
        .filter(FollowUp.lead_id == lead_id)
        .order_by(FollowUp.followed_up_at.desc(), FollowUp.id.desc())
        .all()
    )
    changes = (
        db.query(LeadChange)
        .filter(LeadChange.lead_id == lead_id)
        .order_by(LeadChange.changed_at.desc(), LeadChange.id.desc())
        .all()
    )

    return {
        "lead": lead_to_dict(lead, len(follow_ups), follow_ups[0].followed_up_at if follow_ups else None),
        "follow_ups": [
            {
                "id": f.id,
                "follow_up_number": f.follow_up_number,
                "notes": f.notes,
                "followed_up_at": f.followed_up_at,
            }
            for f in follow_ups
        ],
        "changes": [
            {
                "id": c.id,
                "field_name": c.field_name,
                "old_value": c.old_value,
                "new_value": c.new_value,
                "follow_up_number": c.follow_up.follow_up_number if c.follow_up else None,
                "changed_at": c.changed_at,
            }
            for c in changes
        ],
    }


def get_leads(db: Session) -> List[Dict]:
    """All leads with follow-up counts, newest first."""
    rows = _lead_query(db).order_by(Lead.created_at.desc(), Lead.id.desc()).all()
    return [lead_to_dict(lead, count, last) for lead, count, last in rows]


def get_lead(db: Session, lead_id: int) -> Dict:
    """A lead with follow-up summary, assigned counselors and meetings."""
    row = _lead_query(db).filter(Lead.id == lead_id).first()
    if not row:
        raise NotFoundError("Lead not found")
    lead, count, last = row
    data = lead_to_dict(lead, count, last)
    data["assigned_counselors"] = get_assigned_counselors(db, SubjectRef(SUBJECT_LEAD, lead_id))
    data["meetings"] = list_meetings(db, lead_id=lead_id)
    return data


def update_lead(db: Session, lead_id: int, data: LeadUpdate) -> None:
    """Staff edit of a lead, including its pipeline status."""
    with transaction(db):
        lead = _get_or_404(db, lead_id)
        _ensure_email_free(db, data.email, exclude_lead_id=lead_id)

        lead.full_name = data.full_name
        lead.email = data.email
        lead.phone = data.phone
        lead.address = data.address
        lead.interest = data.interest
        lead.comments = data.comments
        lead.status = data.status

    logger.info("lead_updated", lead_id=lead_id)


def register_lead_as_student(db: Session, lead_id: int) -> Tuple[int, str, str, str]:
    """
    Convert a lead into a student with a client login.

    Returns:
        (student id, student code, login email, generated password)
    """
    with transaction(db):
        lead = _get_or_404(db, lead_id)
        if lead.is_registered:
            raise ValidationError("This lead is already registered as a student")

        first_name, _, surname = lead.full_name.partition(" ")
        student, password = add_student_record(
            db,
            first_name=first_name,
            surname=surname.strip(),
            email=lead.email,
            mobile=lead.phone,
            address=lead.address,
            source_inquiry="Lead",
        )

        lead.is_registered = True
        lead.registered_at = datetime.now(timezone.utc)
        lead.student_id = student.id
        lead.status = "Converted"
        student_id, student_code = student.id, student.student_code

    logger.info("lead_registered_as_student", lead_id=lead_id, student_id=student_id)
    return student_id, student_code, lead.email, password
