"""Pydantic schemas for request/response validation."""
from edconsult.schemas.common import CamelModel, SuccessResponse, ErrorResponse
from edconsult.schemas.meeting import (
    MeetingCreate,
    CounselorMeetingCreate,
    MeetingCreateResponse,
    MeetingStatusUpdate,
    MeetingDetail,
    MeetingResponse,
    BookedSlot,
    AvailableSlotsResponse,
)
from edconsult.schemas.counselor import (
    CounselorCreate,
    CounselorUpdate,
    CounselorSummary,
    CounselorListResponse,
    CounselorDetailResponse,
    CounselorCreateResponse,
    AssignedCounselor,
    AssignCounselorRequest,
)
from edconsult.schemas.lead import (
    LeadCreate,
    LeadUpdate,
    LeadLookupRequest,
    LeadDetail,
    LeadWithRelations,
    LeadCreateResponse,
    LeadListResponse,
    LeadResponse,
    FollowUpResponse,
    LeadHistoryResponse,
    Credentials,
    RegisterStudentResponse,
)
from edconsult.schemas.student import (
    StudentCreate,
    StudentUpdate,
    StudentDetail,
    StudentSummary,
    StudentListResponse,
    StudentResponse,
    StudentCreateResponse,
)
from edconsult.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    UserInfo,
    RegisterResponse,
    LoginResponse,
    VerifyResponse,
)

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "ErrorResponse",
    "MeetingCreate",
    "CounselorMeetingCreate",
    "MeetingCreateResponse",
    "MeetingStatusUpdate",
    "MeetingDetail",
    "MeetingResponse",
    "BookedSlot",
    "AvailableSlotsResponse",
    "CounselorCreate",
    "CounselorUpdate",
    "CounselorSummary",
    "CounselorListResponse",
    "CounselorDetailResponse",
    "CounselorCreateResponse",
    "AssignedCounselor",
    "AssignCounselorRequest",
    "LeadCreate",
    "LeadUpdate",
    "LeadLookupRequest",
    "LeadDetail",
    "LeadWithRelations",
    "LeadCreateResponse",
    "LeadListResponse",
    "LeadResponse",
    "FollowUpResponse",
    "LeadHistoryResponse",
    "Credentials",
    "RegisterStudentResponse",
    "StudentCreate",
    "StudentUpdate",
    "StudentDetail",
    "StudentSummary",
    "StudentListResponse",
    "StudentResponse",
    "StudentCreateResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserInfo",
    "RegisterResponse",
    "LoginResponse",
    "VerifyResponse",
]
