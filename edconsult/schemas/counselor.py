"""Counselor schemas."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import field_validator

from edconsult.core.sanitization import normalize_email, sanitize_name, sanitize_text, validate_phone
from edconsult.schemas.common import CamelModel
from edconsult.schemas.meeting import MeetingDetail


class CounselorCreate(CamelModel):
    name: str
    email: str
    phone: str
    experience: str
    expertise: str
    status: Literal["Active", "Inactive"] = "Active"

    @field_validator("name")
    @classmethod
    def sanitize_name_field(cls, v: str) -> str:
        return sanitize_name(v)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("experience", "expertise")
    @classmethod
    def sanitize_profile_fields(cls, v: str) -> str:
        sanitized = sanitize_text(v, max_length=255)
        if not sanitized:
            raise ValueError("All required fields must be provided")
        return sanitized


class CounselorUpdate(CounselorCreate):
    pass


class CounselorSummary(CamelModel):
    id: int
    counselor_code: str
    name: str
    email: str
    phone: str
    experience: str
    expertise: str
    status: str
    created_at: Optional[datetime] = None
    total_meetings: int = 0
    scheduled_meetings: int = 0
    completed_meetings: int = 0


class CounselorListResponse(CamelModel):
    success: bool = True
    counselors: List[CounselorSummary]
    total: int


class CounselorDetailResponse(CamelModel):
    success: bool = True
    counselor: CounselorSummary
    meetings: List[MeetingDetail]


class CounselorCreateResponse(CamelModel):
    success: bool = True
    message: str
    counselor_id: int
    generated_id: str


class AssignedCounselor(CamelModel):
    id: int
    counselor_code: str
    name: str
    email: str
    phone: str
    assigned_at: Optional[datetime] = None


class AssignCounselorRequest(CamelModel):
    counselor_id: Optional[int] = None
