"""Counselor endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from edconsult.api.deps import get_db, verify_staff_token
from edconsult.schemas import (
    AvailableSlotsResponse,
    BookedSlot,
    CounselorCreate,
    CounselorCreateResponse,
    CounselorDetailResponse,
    CounselorListResponse,
    CounselorMeetingCreate,
    CounselorUpdate,
    MeetingCreate,
    MeetingCreateResponse,
    SuccessResponse,
)
from edconsult.services.assignment import SubjectRef
from edconsult.services.availability import get_booked_slots
from edconsult.services.counselor import (
    create_counselor,
    delete_counselor,
    get_counselor,
    get_counselors,
    update_counselor,
)
from edconsult.services.meeting import delete_meeting
from edconsult.api.v1.endpoints.meetings import book_meeting

router = APIRouter(prefix="/counselors", dependencies=[Depends(verify_staff_token)])


@router.get("", response_model=CounselorListResponse)
def list_counselors_endpoint(db: Session = Depends(get_db)):
    """List counselors with total, scheduled and completed meeting counts."""
    counselors = get_counselors(db)
    return CounselorListResponse(counselors=counselors, total=len(counselors))


@router.get("/{counselor_id}", response_model=CounselorDetailResponse)
def get_counselor_endpoint(counselor_id: int, db: Session = Depends(get_db)):
    """Get a counselor and all of their meetings."""
    counselor = get_counselor(db, counselor_id)
    return CounselorDetailResponse(counselor=counselor, meetings=counselor["meetings"])


@router.post("", response_model=CounselorCreateResponse, status_code=201)
def create_counselor_endpoint(body: CounselorCreate, db: Session = Depends(get_db)):
    """
    Add a counselor.

    A display ID (COUN001, COUN002, ...) is generated from a database
    sequence. Duplicate emails are rejected with 409.
    """
    counselor = create_counselor(db, body)
    return CounselorCreateResponse(
        message="Counselor added successfully!",
        counselor_id=counselor.id,
        generated_id=counselor.counselor_code,
    )


@router.put("/{counselor_id}", response_model=SuccessResponse)
def update_counselor_endpoint(counselor_id: int, body: CounselorUpdate, db: Session = Depends(get_db)):
    """Update a counselor's profile."""
    update_counselor(db, counselor_id, body)
    return SuccessResponse(message="Counselor updated successfully")


@router.delete("/{counselor_id}", response_model=SuccessResponse)
def delete_counselor_endpoint(counselor_id: int, db: Session = Depends(get_db)):
    """Delete a counselor. Their meetings and assignments are removed too."""
    delete_counselor(db, counselor_id)
    return SuccessResponse(message="Counselor deleted successfully")


@router.get("/{counselor_id}/available-slots", response_model=AvailableSlotsResponse)
def available_slots_endpoint(
    counselor_id: int,
    date: Optional[str] = Query(None, description="Calendar date, YYYY-MM-DD"),
    db: Session = Depends(get_db)
):
    """
    Get the booked intervals for a counselor on a date.

    Offsets are minutes since midnight; ``end`` is exclusive. Cancelled
    meetings are not included.

    Example:
        Request:
            GET /api/v1/counselors/4/available-slots?date=2024-06-01

        Response (200):
            {"success": true, "bookedSlots": [{"start": 600, "end": 630}]}

        Response (400):
            {"success": false, "message": "Date is required"}
    """
    slots = get_booked_slots(db, counselor_id, date)
    return AvailableSlotsResponse(booked_slots=[BookedSlot(start=s.start, end=s.end) for s in slots])


@router.post("/{counselor_id}/meetings", response_model=MeetingCreateResponse, status_code=201)
def schedule_counselor_meeting_endpoint(
    counselor_id: int,
    body: CounselorMeetingCreate,
    db: Session = Depends(get_db)
):
    """Book a meeting from the counselor's side for an assigned lead or student."""
    request = MeetingCreate(
        counselor_id=counselor_id,
        meeting_date=body.meeting_date,
        meeting_time=body.meeting_time,
        duration_minutes=body.duration_minutes,
        notes=body.notes,
    )
    return book_meeting(db, SubjectRef(body.subject_type, body.subject_id), request)


@router.delete("/{counselor_id}/meetings/{meeting_id}", response_model=SuccessResponse)
def delete_counselor_meeting_endpoint(counselor_id: int, meeting_id: int, db: Session = Depends(get_db)):
    """Delete one of the counselor's meetings."""
    delete_meeting(db, counselor_id, meeting_id)
    return SuccessResponse(message="Meeting deleted successfully")
