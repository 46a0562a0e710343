"""Booked-interval lookup for a counselor's day."""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from edconsult.core.constants import MEETING_STATUS_CANCELLED
from edconsult.core.exceptions import ValidationError
from edconsult.core.utils import parse_meeting_date, to_minute_offset
from edconsult.db.models import Meeting


@dataclass(frozen=True)
class TimeSlot:
    """A booked interval [start, end) in minutes since midnight."""
    start: int
    end: int
    meeting_id: Optional[int] = None
    duration_minutes: int = 0


def list_active_meetings(db: Session, counselor_id: int, meeting_date: date) -> List[Meeting]:
    """Non-cancelled meetings for a counselor on a date, earliest first."""
    return (
        db.query(Meeting)
        .filter(
            Meeting.counselor_id == counselor_id,
            Meeting.meeting_date == meeting_date,
            Meeting.status != MEETING_STATUS_CANCELLED,
        )
        .order_by(Meeting.meeting_time.asc(), Meeting.id.asc())
        .all()
    )


def get_booked_slots(
    db: Session,
    counselor_id: int,
    meeting_date: Union[str, date, None],
) -> List[TimeSlot]:
    """
    Get the occupied intervals for a counselor on a given date.

    Counselor existence is not checked here; callers that need a 404 for an
    unknown counselor must check it themselves.

    Args:
        db: Database session
        counselor_id: Counselor primary key
        meeting_date: Calendar date as ``date`` or ``YYYY-MM-DD`` string

    Returns:
        TimeSlots ordered by start offset; empty when nothing is booked

    Raises:
        ValidationError: If the date is missing or malformed
    """
    if meeting_date is None:
        raise ValidationError("Date is required")
    try:
        day = parse_meeting_date(meeting_date)
    except ValueError as e:
        raise ValidationError(str(e))

    slots = []
    for meeting in list_active_meetings(db, counselor_id, day):
        start = to_minute_offset(meeting.meeting_time)
        slots.append(TimeSlot(
            start=start,
            end=start + meeting.duration_minutes,
            meeting_id=meeting.id,
            duration_minutes=meeting.duration_minutes,
        ))
    return slots
