"""Meeting record lookups, status updates and deletion."""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from edconsult.core.constants import MEETING_STATUSES, MEETING_STATUS_TRANSITIONS
from edconsult.core.exceptions import NotFoundError, ValidationError
from edconsult.core.logging_config import get_logger
from edconsult.core.utils import to_minute_offset
from edconsult.db import transaction
from edconsult.db.models import Meeting

logger = get_logger(__name__)


def meeting_to_dict(meeting: Meeting) -> Dict:
    """Serialize a meeting row."""
    start = to_minute_offset(meeting.meeting_time)
    return {
        "id": meeting.id,
        "counselor_id": meeting.counselor_id,
        "counselor_name": meeting.counselor.name if meeting.counselor else None,
        "lead_id": meeting.lead_id,
        "student_id": meeting.student_id,
        "subject_name": meeting.subject_name,
        "student_code": meeting.student_code,
        "meeting_date": meeting.meeting_date.isoformat(),
        "meeting_time": meeting.meeting_time.strftime("%H:%M"),
        "duration_minutes": meeting.duration_minutes,
        "start": start,
        "end": start + meeting.duration_minutes,
        "status": meeting.status,
        "notes": meeting.notes,
        "notes_image_path": meeting.notes_image_path,
    }


def list_meetings(
    db: Session,
    counselor_id: Optional[int] = None,
    lead_id: Optional[int] = None,
    student_id: Optional[int] = None,
) -> List[Dict]:
    """Meetings filtered by counselor and/or subject, latest first."""
    query = db.query(Meeting)
    if counselor_id is not None:
        query = query.filter(Meeting.counselor_id == counselor_id)
    if lead_id is not None:
        query = query.filter(Meeting.lead_id == lead_id)
    if student_id is not None:
        query = query.filter(Meeting.student_id == student_id)

    meetings = query.order_by(Meeting.meeting_date.desc(), Meeting.meeting_time.desc()).all()
    return [meeting_to_dict(m) for m in meetings]


def get_meeting(db: Session, meeting_id: int) -> Dict:
    """Get one meeting or raise NotFoundError."""
    meeting = db.query(Meeting).filter(Meeting.id == meeting_id).first()
    if not meeting:
        raise NotFoundError("Meeting not found")
    return meeting_to_dict(meeting)


def update_meeting_status(db: Session, meeting_id: int, status: Optional[str]) -> Dict:
    """
    Move a meeting to Completed or Cancelled.

    Only Scheduled meetings can change status; Completed and Cancelled are
    final. Cancelling frees the slot for new bookings.
    """
    if status not in MEETING_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(MEETING_STATUSES)}")

    with transaction(db):
        meeting = (
            db.query(Meeting)
            .filter(Meeting.id == meeting_id)
            .with_for_update()
            .first()
        )
        if not meeting:
            raise NotFoundError("Meeting not found")

        if status != meeting.status:
            if status not in MEETING_STATUS_TRANSITIONS[meeting.status]:
                raise ValidationError(f"Cannot change meeting status from {meeting.status} to {status}")
            previous = meeting.status
            meeting.status = status
            logger.info("meeting_status_changed", meeting_id=meeting_id, old_status=previous, new_status=status)

        db.flush()
        result = meeting_to_dict(meeting)

    return result


def delete_meeting(db: Session, counselor_id: int, meeting_id: int) -> None:
    """Delete one of a counselor's meetings."""
    with transaction(db):
        meeting = (
            db.query(Meeting)
            .filter(Meeting.id == meeting_id, Meeting.counselor_id == counselor_id)
            .first()
        )
        if not meeting:
            raise NotFoundError("Meeting not found")
        db.delete(meeting)

    logger.info("meeting_deleted", meeting_id=meeting_id, counselor_id=counselor_id)
