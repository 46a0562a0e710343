"""Student schemas."""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import field_validator

from edconsult.core.sanitization import (
    normalize_email,
    sanitize_optional_text,
    sanitize_text,
    validate_address,
    validate_phone,
)
from edconsult.schemas.common import CamelModel
from edconsult.schemas.counselor import AssignedCounselor
from edconsult.schemas.lead import Credentials
from edconsult.schemas.meeting import MeetingDetail


class StudentCreate(CamelModel):
    first_name: str
    middle_name: Optional[str] = None
    surname: str
    email: str
    mobile: str
    address: str
    country: str
    dob: date
    guardian_name: str
    guardian_relation: str
    guardian_mobile: str
    guardian_email: Optional[str] = None
    source_inquiry: Optional[str] = None

    @field_validator("first_name", "surname", "country", "guardian_name", "guardian_relation")
    @classmethod
    def sanitize_required(cls, v: str) -> str:
        sanitized = sanitize_text(v, max_length=150)
        if not sanitized:
            raise ValueError("All required fields must be provided")
        return sanitized

    @field_validator("middle_name", "source_inquiry")
    @classmethod
    def sanitize_optional(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_optional_text(v, max_length=150)

    @field_validator("email")
    @classmethod
    def normalize_email_field(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("guardian_email")
    @classmethod
    def normalize_guardian_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return normalize_email(v)

    @field_validator("mobile", "guardian_mobile")
    @classmethod
    def validate_phone_fields(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("address")
    @classmethod
    def validate_address_field(cls, v: str) -> str:
        return validate_address(v)


class StudentUpdate(StudentCreate):
    status: Literal["Active", "Inactive", "Graduated"] = "Active"


class StudentDetail(CamelModel):
    id: int
    student_code: str
    name: str
    first_name: str
    middle_name: Optional[str] = None
    surname: str
    email: str
    mobile: str
    address: str
    country: Optional[str] = None
    dob: Optional[date] = None
    guardian_name: Optional[str] = None
    guardian_relation: Optional[str] = None
    guardian_mobile: Optional[str] = None
    guardian_email: Optional[str] = None
    source_inquiry: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class StudentSummary(StudentDetail):
    counselor_count: int = 0
    meeting_count: int = 0


class StudentListResponse(CamelModel):
    success: bool = True
    students: List[StudentSummary]
    total: int


class StudentResponse(CamelModel):
    success: bool = True
    student: StudentDetail
    assigned_counselors: List[AssignedCounselor]
    meetings: List[MeetingDetail]


class StudentCreateResponse(CamelModel):
    success: bool = True
    message: str
    student_id: int
    generated_student_id: str
    credentials: Credentials
