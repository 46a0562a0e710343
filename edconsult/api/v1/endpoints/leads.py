"""Lead endpoints.

The inquiry form, lookup and follow-up are public. Everything else requires
a staff token.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from edconsult.api.deps import get_db, verify_staff_token
from edconsult.core.constants import SUBJECT_LEAD
from edconsult.core.rate_limit import limiter, RATE_LIMITS
from edconsult.schemas import (
    AssignCounselorRequest,
    Credentials,
    FollowUpResponse,
    LeadCreate,
    LeadCreateResponse,
    LeadHistoryResponse,
    LeadListResponse,
    LeadLookupRequest,
    LeadResponse,
    LeadUpdate,
    MeetingCreate,
    MeetingCreateResponse,
    RegisterStudentResponse,
    SuccessResponse,
)
from edconsult.services.assignment import SubjectRef, assign_counselor, unassign_counselor
from edconsult.services.lead import (
    create_lead,
    get_lead,
    get_lead_history,
    get_leads,
    lookup_lead,
    record_follow_up,
    register_lead_as_student,
    update_lead,
)
from edconsult.api.v1.endpoints.meetings import book_meeting

public_router = APIRouter(prefix="/leads")
router = APIRouter(prefix="/leads", dependencies=[Depends(verify_staff_token)])


@public_router.post("", response_model=LeadCreateResponse, status_code=201)
@limiter.limit(RATE_LIMITS["lead_submit"])
def create_lead_endpoint(request: Request, body: LeadCreate, db: Session = Depends(get_db)):
    """
    Submit the public inquiry form.

    Example:
        Request:
            POST /api/v1/leads
            {"fullName": "Sam Lee", "email": "sam@example.com",
             "phone": "+1 555 010 0199", "address": "12 Harbour Road, Leeds",
             "interest": "MSc Computing"}

        Response (201):
            {"success": true, "message": "Your Form has been submitted successfully!", "leadId": 7}

        Response (409):
            {"success": false, "message": "A lead with this email address already exists. ..."}
    """
    lead = create_lead(db, body)
    return LeadCreateResponse(message="Your Form has been submitted successfully!", lead_id=lead.id)


@public_router.post("/lookup", response_model=LeadResponse)
@limiter.limit(RATE_LIMITS["lead_lookup"])
def lookup_lead_endpoint(request: Request, body: LeadLookupRequest, db: Session = Depends(get_db)):
    """Find an existing inquiry by name and email so it can be followed up."""
    lead = lookup_lead(db, body.lookup_name, body.lookup_email)
    return LeadResponse(message="Record found", lead=lead)


@public_router.post("/{lead_id}/follow-up", response_model=FollowUpResponse)
@limiter.limit(RATE_LIMITS["lead_submit"])
def follow_up_endpoint(request: Request, lead_id: int, body: LeadCreate, db: Session = Depends(get_db)):
    """Resubmit the inquiry form for an existing lead; changed fields are recorded."""
    number, changes = record_follow_up(db, lead_id, body)
    return FollowUpResponse(
        message="Your follow-up has been submitted successfully!",
        follow_up_number=number,
        changes_tracked=changes,
    )


@router.get("", response_model=LeadListResponse)
def list_leads_endpoint(db: Session = Depends(get_db)):
    leads = get_leads(db)
    return LeadListResponse(leads=leads, total=len(leads))


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead_endpoint(lead_id: int, db: Session = Depends(get_db)):
    return LeadResponse(lead=get_lead(db, lead_id))


@router.get("/{lead_id}/history", response_model=LeadHistoryResponse)
def lead_history_endpoint(lead_id: int, db: Session = Depends(get_db)):
    """Follow-ups and field-level changes for a lead, newest first."""
    return LeadHistoryResponse(**get_lead_history(db, lead_id))


@router.put("/{lead_id}", response_model=SuccessResponse)
def update_lead_endpoint(lead_id: int, body: LeadUpdate, db: Session = Depends(get_db)):
    update_lead(db, lead_id, body)
    return SuccessResponse(message="Lead updated successfully")


@router.post("/{lead_id}/register-student", response_model=RegisterStudentResponse, status_code=201)
def register_student_endpoint(lead_id: int, db: Session = Depends(get_db)):
    """
    Register a lead as a student.

    Creates the student record and a client login. The generated password
    is only returned here.
    """
    student_id, student_code, email, password = register_lead_as_student(db, lead_id)
    return RegisterStudentResponse(
        message="Lead registered as student successfully",
        student_id=student_id,
        generated_student_id=student_code,
        credentials=Credentials(email=email, password=password),
    )


@router.post("/{lead_id}/assign-counselor", response_model=SuccessResponse, status_code=201)
def assign_counselor_endpoint(lead_id: int, body: AssignCounselorRequest, db: Session = Depends(get_db)):
    assign_counselor(db, body.counselor_id, SubjectRef(SUBJECT_LEAD, lead_id))
    return SuccessResponse(message="Counselor assigned successfully")


@router.delete("/{lead_id}/counselors/{counselor_id}", response_model=SuccessResponse)
def unassign_counselor_endpoint(lead_id: int, counselor_id: int, db: Session = Depends(get_db)):
    unassign_counselor(db, counselor_id, SubjectRef(SUBJECT_LEAD, lead_id))
    return SuccessResponse(message="Counselor unassigned successfully")


@router.post("/{lead_id}/meetings", response_model=MeetingCreateResponse, status_code=201)
def schedule_lead_meeting_endpoint(lead_id: int, body: MeetingCreate, db: Session = Depends(get_db)):
    """
    Book a meeting between a lead and one of their assigned counselors.

    Example:
        Request:
            POST /api/v1/leads/7/meetings
            {"counselorId": 4, "meetingDate": "2024-06-01",
             "meetingTime": "10:00", "durationMinutes": 30}

        Response (201):
            {"success": true, "message": "Meeting scheduled successfully",
             "meetingId": 19, "subjectName": "Sam Lee"}

        Response (409):
            {"success": false,
             "message": "This time slot conflicts with an existing meeting from 10:15 (30 minutes)"}
    """
    return book_meeting(db, SubjectRef(SUBJECT_LEAD, lead_id), body)
