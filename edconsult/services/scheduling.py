"""Conflict-checked meeting scheduling.

A booking is accepted only when the counselor is assigned to the subject,
the subject exists, the meeting sits inside business hours and it does not
overlap any of the counselor's non-cancelled meetings that day. All checks
and the insert share one transaction. The counselor row is locked
(``SELECT ... FOR UPDATE``) before the overlap read, so concurrent bookings
for the same counselor are serialized until commit and cannot both pass the
overlap check.
"""
from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union
from sqlalchemy.orm import Session, Query

from edconsult.core.constants import (
    BUSINESS_DAY_END_MINUTES,
    BUSINESS_DAY_START_MINUTES,
    MAX_MEETING_DURATION_MINUTES,
    MEETING_STATUS_SCHEDULED,
    MIN_MEETING_DURATION_MINUTES,
    SUBJECT_LEAD,
)
from edconsult.core.exceptions import ConflictError, NotFoundError, ValidationError
from edconsult.core.logging_config import get_logger
from edconsult.core.sanitization import sanitize_optional_text
from edconsult.core.utils import (
    format_minute_offset,
    intervals_overlap,
    parse_meeting_date,
    parse_time_of_day,
    to_minute_offset,
)
from edconsult.db import transaction
from edconsult.db.models import Counselor, Meeting
from edconsult.services.assignment import SubjectRef, get_subject, is_assigned
from edconsult.services.availability import get_booked_slots

logger = get_logger(__name__)

BUSINESS_HOURS_LABEL = (
    f"{format_minute_offset(BUSINESS_DAY_START_MINUTES)}-"
    f"{format_minute_offset(BUSINESS_DAY_END_MINUTES)}"
)


@dataclass(frozen=True)
class ScheduledMeeting:
    """Result of a successful booking."""
    meeting_id: int
    subject_name: str
    counselor_id: int
    meeting_date: date
    start: int
    end: int


def counselor_lock_query(db: Session, counselor_id: int) -> Query:
    """Query that row-locks the counselor until the transaction ends."""
    return (
        db.query(Counselor)
        .filter(Counselor.id == counselor_id)
        .with_for_update()
    )


def _check_required(
    counselor_id: Optional[int],
    meeting_date: Union[str, date, None],
    meeting_time: Union[str, time, None],
    duration_minutes: Optional[int],
) -> None:
    fields = {
        "counselorId": counselor_id,
        "meetingDate": meeting_date,
        "meetingTime": meeting_time,
        "durationMinutes": duration_minutes,
    }
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        raise ValidationError(f"Missing required field: {', '.join(missing)}")


def _check_duration(duration_minutes: int) -> None:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ValidationError("Duration must be a whole number of minutes")
    if not MIN_MEETING_DURATION_MINUTES <= duration_minutes <= MAX_MEETING_DURATION_MINUTES:
        raise ValidationError(
            f"Meeting duration out of range: must be between {MIN_MEETING_DURATION_MINUTES} "
            f"and {MAX_MEETING_DURATION_MINUTES} minutes"
        )


def _check_business_hours(start: int, end: int) -> None:
    if start < BUSINESS_DAY_START_MINUTES:
        raise ValidationError(
            f"Meeting is outside business hours: it starts before business hours ({BUSINESS_HOURS_LABEL})"
        )
    if end > BUSINESS_DAY_END_MINUTES:
        raise ValidationError(
            f"Meeting is outside business hours: it ends after business hours ({BUSINESS_HOURS_LABEL})"
        )


def schedule_meeting(
    db: Session,
    counselor_id: Optional[int],
    subject: SubjectRef,
    meeting_date: Union[str, date, None],
    meeting_time: Union[str, time, None],
    duration_minutes: Optional[int],
    notes: Optional[str] = None,
) -> ScheduledMeeting:
    """
    Validate and book a meeting between a counselor and a lead or student.

    Args:
        db: Database session
        counselor_id: Counselor primary key
        subject: The lead or student the meeting concerns
        meeting_date: Calendar date (``YYYY-MM-DD`` or ``date``)
        meeting_time: Start time (``HH:MM`` or ``time``)
        duration_minutes: Length of the meeting, 15..480
        notes: Optional free-text notes

    Returns:
        ScheduledMeeting with the new meeting id and the subject name snapshot

    Raises:
        ValidationError: Missing fields, duration out of range, counselor not
            assigned, malformed date/time or outside business hours
        NotFoundError: Subject or counselor does not exist
        ConflictError: Overlaps an existing non-cancelled meeting
        StorageError: Database failure (transaction rolled back)
    """
    _check_required(counselor_id, meeting_date, meeting_time, duration_minutes)
    _check_duration(duration_minutes)
    try:
        notes = sanitize_optional_text(notes)
    except ValueError as e:
        raise ValidationError(str(e))

    with transaction(db):
        if not is_assigned(db, counselor_id, subject):
            raise ValidationError(f"This counselor is not assigned to this {subject.kind}")

        subject_name, student_code = get_subject(db, subject)

        try:
            day = parse_meeting_date(meeting_date)
            start_time = parse_time_of_day(meeting_time)
        except ValueError as e:
            raise ValidationError(str(e))

        start = to_minute_offset(start_time)
        end = start + duration_minutes
        _check_business_hours(start, end)

        if counselor_lock_query(db, counselor_id).first() is None:
            raise NotFoundError("Counselor not found")

        for slot in get_booked_slots(db, counselor_id, day):
            if intervals_overlap(start, end, slot.start, slot.end):
                logger.info(
                    "meeting_conflict",
                    counselor_id=counselor_id,
                    meeting_date=day.isoformat(),
                    requested_start=start,
                    existing_meeting_id=slot.meeting_id,
                )
                raise ConflictError(
                    "This time slot conflicts with an existing meeting from "
                    f"{format_minute_offset(slot.start)} ({slot.duration_minutes} minutes)"
                )

        meeting = Meeting(
            counselor_id=counselor_id,
            lead_id=subject.id if subject.kind == SUBJECT_LEAD else None,
            student_id=None if subject.kind == SUBJECT_LEAD else subject.id,
            subject_name=subject_name,
            student_code=student_code,
            meeting_date=day,
            meeting_time=start_time,
            duration_minutes=duration_minutes,
            status=MEETING_STATUS_SCHEDULED,
            notes=notes,
        )
        db.add(meeting)
        db.flush()
        meeting_id = meeting.id

    logger.info(
        "meeting_scheduled",
        meeting_id=meeting_id,
        counselor_id=counselor_id,
        subject_kind=subject.kind,
        subject_id=subject.id,
        meeting_date=day.isoformat(),
        start=start,
        end=end,
    )

    return ScheduledMeeting(
        meeting_id=meeting_id,
        subject_name=subject_name,
        counselor_id=counselor_id,
        meeting_date=day,
        start=start,
        end=end,
    )
