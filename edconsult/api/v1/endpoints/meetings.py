"""Meeting endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from edconsult.api.deps import get_db, verify_staff_token
from edconsult.schemas import (
    MeetingCreate,
    MeetingCreateResponse,
    MeetingResponse,
    MeetingStatusUpdate,
)
from edconsult.services.assignment import SubjectRef
from edconsult.services.meeting import get_meeting, update_meeting_status
from edconsult.services.scheduling import schedule_meeting

router = APIRouter(dependencies=[Depends(verify_staff_token)])


def book_meeting(db: Session, subject: SubjectRef, body: MeetingCreate) -> MeetingCreateResponse:
    """Run the conflict-checked scheduler for a lead or student booking request."""
    scheduled = schedule_meeting(
        db,
        counselor_id=body.counselor_id,
        subject=subject,
        meeting_date=body.meeting_date,
        meeting_time=body.meeting_time,
        duration_minutes=body.duration_minutes,
        notes=body.notes,
    )
    return MeetingCreateResponse(
        message="Meeting scheduled successfully",
        meeting_id=scheduled.meeting_id,
        subject_name=scheduled.subject_name,
    )


@router.get("/meetings/{meeting_id}", response_model=MeetingResponse)
def get_meeting_endpoint(meeting_id: int, db: Session = Depends(get_db)):
    """Get a single meeting."""
    return MeetingResponse(meeting=get_meeting(db, meeting_id))


@router.patch("/meetings/{meeting_id}/status", response_model=MeetingResponse)
def update_meeting_status_endpoint(
    meeting_id: int,
    body: MeetingStatusUpdate,
    db: Session = Depends(get_db)
):
    """
    Mark a scheduled meeting as Completed or Cancelled.

    Example:
        Request:
            PATCH /api/v1/meetings/12/status
            {"status": "Cancelled"}

        Response (200):
            {"success": true, "meeting": {"id": 12, "status": "Cancelled", ...}}

        Response (400):
            {"success": false, "message": "Cannot change meeting status from Cancelled to Completed"}

    Note:
        Cancelled meetings no longer count as booked, so their slot can be
        scheduled again.
    """
    return MeetingResponse(meeting=update_meeting_status(db, meeting_id, body.status))
