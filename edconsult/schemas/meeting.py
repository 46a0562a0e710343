"""Meeting and availability schemas."""
from datetime import date
from typing import List, Literal, Optional
from pydantic import Field

from edconsult.schemas.common import CamelModel


class MeetingCreate(CamelModel):
    """Booking request for a lead or student.

    Scheduling fields are optional here; the scheduler reports which
    required field is missing.
    """
    counselor_id: Optional[int] = None
    meeting_date: Optional[date] = None
    meeting_time: Optional[str] = Field(None, max_length=8)
    duration_minutes: Optional[int] = None
    notes: Optional[str] = Field(None, max_length=2000)


class CounselorMeetingCreate(CamelModel):
    """Booking request made from the counselor's side."""
    subject_type: Literal["lead", "student"]
    subject_id: int
    meeting_date: Optional[date] = None
    meeting_time: Optional[str] = Field(None, max_length=8)
    duration_minutes: Optional[int] = None
    notes: Optional[str] = Field(None, max_length=2000)


class MeetingCreateResponse(CamelModel):
    success: bool = True
    message: str
    meeting_id: int
    subject_name: str


class MeetingStatusUpdate(CamelModel):
    status: Optional[str] = None


class MeetingDetail(CamelModel):
    id: int
    counselor_id: int
    counselor_name: Optional[str] = None
    lead_id: Optional[int] = None
    student_id: Optional[int] = None
    subject_name: str
    student_code: Optional[str] = None
    meeting_date: str
    meeting_time: str
    duration_minutes: int
    start: int
    end: int
    status: str
    notes: Optional[str] = None
    notes_image_path: Optional[str] = None


class MeetingResponse(CamelModel):
    success: bool = True
    meeting: MeetingDetail


class BookedSlot(CamelModel):
    start: int
    end: int


class AvailableSlotsResponse(CamelModel):
    success: bool = True
    booked_slots: List[BookedSlot]
