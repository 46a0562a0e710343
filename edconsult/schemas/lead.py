"""Lead schemas."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field, field_validator

from edconsult.core.sanitization import (
    normalize_email,
    sanitize_name,
    sanitize_optional_text,
    sanitize_text,
    validate_address,
    validate_phone,
)
from edconsult.schemas.common import CamelModel
from edconsult.schemas.counselor import AssignedCounselor
from edconsult.schemas.meeting import MeetingDetail


class LeadCreate(CamelModel):
    """Inquiry form submitted by a prospective client (also used for follow-ups)."""
    full_name: str
    email: str
    phone: str
    address: str
    interest: str
    comments: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def sanitize_full_name(cls, v: str) -> str:
        return sanitize_name(v)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("address")
    @classmethod
    def validate_address_field(cls, v: str) -> str:
        return validate_address(v)

    @field_validator("interest")
    @classmethod
    def sanitize_interest(cls, v: str) -> str:
        sanitized = sanitize_text(v, max_length=255)
        if not sanitized:
            raise ValueError("Interest is required")
        return sanitized

    @field_validator("comments")
    @classmethod
    def sanitize_comments(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_optional_text(v)


class LeadUpdate(LeadCreate):
    status: Literal["New", "Contacted", "Qualified", "Converted", "Lost"] = "New"


class LeadLookupRequest(CamelModel):
    lookup_name: str = Field(..., min_length=1, max_length=150)
    lookup_email: str

    @field_validator("lookup_email")
    @classmethod
    def normalize_lookup_email(cls, v: str) -> str:
        return normalize_email(v)


class LeadDetail(CamelModel):
    id: int
    full_name: str
    email: str
    phone: str
    address: str
    interest: str
    comments: Optional[str] = None
    status: str
    is_follow_up: bool
    is_registered: bool
    registered_at: Optional[datetime] = None
    student_id: Optional[int] = None
    follow_up_count: int = 0
    last_follow_up: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LeadWithRelations(LeadDetail):
    assigned_counselors: List[AssignedCounselor] = []
    meetings: List[MeetingDetail] = []


class LeadCreateResponse(CamelModel):
    success: bool = True
    message: str
    lead_id: int


class LeadListResponse(CamelModel):
    success: bool = True
    leads: List[LeadDetail]
    total: int


class LeadResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    lead: LeadWithRelations


class FollowUpResponse(CamelModel):
    success: bool = True
    message: str
    follow_up_number: int
    changes_tracked: int


class FollowUpDetail(CamelModel):
    id: int
    follow_up_number: int
    notes: Optional[str] = None
    followed_up_at: Optional[datetime] = None


class LeadChangeDetail(CamelModel):
    id: int
    field_name: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    follow_up_number: Optional[int] = None
    changed_at: Optional[datetime] = None


class LeadHistoryResponse(CamelModel):
    success: bool = True
    lead: LeadDetail
    follow_ups: List[FollowUpDetail]
    changes: List[LeadChangeDetail]


class Credentials(CamelModel):
    email: str
    password: str


class RegisterStudentResponse(CamelModel):
    success: bool = True
    message: str
    student_id: int
    generated_student_id: str
    credentials: Credentials
