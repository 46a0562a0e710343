"""Counselor business logic."""
from typing import Dict, List
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from edconsult.core.constants import (
    COUNSELOR_CODE_PREFIX,
    MEETING_STATUS_COMPLETED,
    MEETING_STATUS_SCHEDULED,
)
from edconsult.core.exceptions import ConflictError, NotFoundError
from edconsult.core.logging_config import get_logger
from edconsult.core.utils import format_display_id
from edconsult.db import transaction
from edconsult.db.models import Counselor, Meeting
from edconsult.schemas.counselor import CounselorCreate, CounselorUpdate
from edconsult.services.meeting import list_meetings
from edconsult.services.sequence import next_value

logger = get_logger(__name__)

COUNSELOR_SEQUENCE = "counselor"


def counselor_to_dict(counselor: Counselor) -> Dict:
    """Serialize a counselor row."""
    return {
        "id": counselor.id,
        "counselor_code": counselor.counselor_code,
        "name": counselor.name,
        "email": counselor.email,
        "phone": counselor.phone,
        "experience": counselor.experience,
        "expertise": counselor.expertise,
        "status": counselor.status,
        "created_at": counselor.created_at,
    }


def get_counselors(db: Session) -> List[Dict]:
    """All counselors with total, scheduled and completed meeting counts."""
    rows = (
        db.query(
            Counselor,
            func.count(Meeting.id),
            func.count(case((Meeting.status == MEETING_STATUS_SCHEDULED, Meeting.id))),
            func.count(case((Meeting.status == MEETING_STATUS_COMPLETED, Meeting.id))),
        )
        .outerjoin(Meeting, Meeting.counselor_id == Counselor.id)
        .group_by(Counselor.id)
        .order_by(Counselor.created_at.desc(), Counselor.id.desc())
        .all()
    )

    result = []
    for counselor, total, scheduled, completed in rows:
        data = counselor_to_dict(counselor)
        data.update({
            "total_meetings": total,
            "scheduled_meetings": scheduled,
            "completed_meetings": completed,
        })
        result.append(data)
    return result


def _get_or_404(db: Session, counselor_id: int) -> Counselor:
    counselor = db.query(Counselor).filter(Counselor.id == counselor_id).first()
    if not counselor:
        raise NotFoundError("Counselor not found")
    return counselor


def get_counselor(db: Session, counselor_id: int) -> Dict:
    """A counselor with all of their meetings."""
    counselor = _get_or_404(db, counselor_id)
    data = counselor_to_dict(counselor)
    data["meetings"] = list_meetings(db, counselor_id=counselor_id)
    data["total_meetings"] = len(data["meetings"])
    return data


def create_counselor(db: Session, data: CounselorCreate) -> Counselor:
    """Create a counselor with the next COUN### display code."""
    with transaction(db):
        existing = db.query(Counselor).filter(Counselor.email == data.email).first()
        if existing:
            raise ConflictError("A counselor with this email address already exists")

        counselor = Counselor(
            counselor_code=format_display_id(COUNSELOR_CODE_PREFIX, next_value(db, COUNSELOR_SEQUENCE)),
            name=data.name,
            email=data.email,
            phone=data.phone,
            experience=data.experience,
            expertise=data.expertise,
            status=data.status,
        )
        db.add(counselor)
        db.flush()

    logger.info("counselor_created", counselor_id=counselor.id, counselor_code=counselor.counselor_code)
    return counselor


def update_counselor(db: Session, counselor_id: int, data: CounselorUpdate) -> None:
    """Replace a counselor's editable fields."""
    with transaction(db):
        counselor = _get_or_404(db, counselor_id)

        email_taken = (
            db.query(Counselor.id)
            .filter(Counselor.email == data.email, Counselor.id != counselor_id)
            .first()
        )
        if email_taken:
            raise ConflictError("This email address is already associated with another counselor")

        counselor.name = data.name
        counselor.email = data.email
        counselor.phone = data.phone
        counselor.experience = data.experience
        counselor.expertise = data.expertise
        counselor.status = data.status

    logger.info("counselor_updated", counselor_id=counselor_id)


def delete_counselor(db: Session, counselor_id: int) -> None:
    """Delete a counselor together with their meetings and assignments."""
    with transaction(db):
        counselor = _get_or_404(db, counselor_id)
        db.delete(counselor)

    logger.info("counselor_deleted", counselor_id=counselor_id)
