"""Student business logic."""
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from edconsult.core.constants import ROLE_CLIENT, STUDENT_CODE_PREFIX, SUBJECT_STUDENT
from edconsult.core.exceptions import ConflictError, NotFoundError
from edconsult.core.logging_config import get_logger
from edconsult.core.security import get_password_hash
from edconsult.core.utils import format_display_id, generate_password
from edconsult.db import transaction
from edconsult.db.models import Meeting, Student, StudentCounselor, User
from edconsult.schemas.student import StudentCreate, StudentUpdate
from edconsult.services.assignment import SubjectRef, get_assigned_counselors
from edconsult.services.meeting import list_meetings
from edconsult.services.sequence import next_value

logger = get_logger(__name__)


def compose_name(first_name: str, middle_name: Optional[str], surname: str) -> str:
    """Display name as ``first [middle] surname``."""
    return " ".join(part for part in (first_name, middle_name, surname) if part)


def next_student_code(db: Session, year: Optional[int] = None) -> str:
    """Next STU<year><NNN> code; numbering restarts every calendar year."""
    year = year or datetime.now(timezone.utc).year
    number = next_value(db, f"student:{year}")
    return format_display_id(f"{STUDENT_CODE_PREFIX}{year}", number)


def student_to_dict(student: Student) -> Dict:
    """Serialize a student row."""
    return {
        "id": student.id,
        "student_code": student.student_code,
        "name": student.name,
        "first_name": student.first_name,
        "middle_name": student.middle_name,
        "surname": student.surname,
        "email": student.email,
        "mobile": student.mobile,
        "address": student.address,
        "country": student.country,
        "dob": student.dob,
        "guardian_name": student.guardian_name,
        "guardian_relation": student.guardian_relation,
        "guardian_mobile": student.guardian_mobile,
        "guardian_email": student.guardian_email,
        "source_inquiry": student.source_inquiry,
        "status": student.status,
        "created_at": student.created_at,
    }


def _ensure_email_free(db: Session, email: str, exclude_student_id: Optional[int] = None) -> None:
    query = db.query(Student.id).filter(Student.email == email)
    if exclude_student_id is not None:
        query = query.filter(Student.id != exclude_student_id)
    if query.first():
        raise ConflictError("A student with this email already exists")


def add_student_record(
    db: Session,
    first_name: str,
    surname: str,
    email: str,
    mobile: str,
    address: str,
    middle_name: Optional[str] = None,
    country: Optional[str] = None,
    dob: Optional[date] = None,
    **extra,
) -> Tuple[Student, str]:
    """
    Insert a student and their client login inside the caller's transaction.

    Returns:
        (student, generated plaintext password)

    Raises:
        ConflictError: If a student or user already uses the email
    """
    _ensure_email_free(db, email)
    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("A user with this email already exists in the system")

    name = compose_name(first_name, middle_name, surname)
    password = generate_password()

    user = User(name=name, email=email, password_hash=get_password_hash(password), role=ROLE_CLIENT)
    db.add(user)
    db.flush()

    student = Student(
        student_code=next_student_code(db),
        user_id=user.id,
        first_name=first_name,
        middle_name=middle_name,
        surname=surname,
        name=name,
        email=email,
        mobile=mobile,
        address=address,
        country=country,
        dob=dob,
        **extra,
    )
    db.add(student)
    db.flush()
    return student, password


def get_students(db: Session) -> List[Dict]:
    """All students with counselor and meeting counts, newest first."""
    counselor_counts = dict(
        db.query(StudentCounselor.student_id, func.count(StudentCounselor.id))
        .group_by(StudentCounselor.student_id)
        .all()
    )
    meeting_counts = dict(
        db.query(Meeting.student_id, func.count(Meeting.id))
        .filter(Meeting.student_id.isnot(None))
        .group_by(Meeting.student_id)
        .all()
    )

    students = db.query(Student).order_by(Student.created_at.desc(), Student.id.desc()).all()
    result = []
    for student in students:
        data = student_to_dict(student)
        data["counselor_count"] = counselor_counts.get(student.id, 0)
        data["meeting_count"] = meeting_counts.get(student.id, 0)
        result.append(data)
    return result


def _get_or_404(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    return student


def get_student(db: Session, student_id: int) -> Dict:
    """A student with assigned counselors and meetings."""
    student = _get_or_404(db, student_id)
    return {
        "student": student_to_dict(student),
        "assigned_counselors": get_assigned_counselors(db, SubjectRef(SUBJECT_STUDENT, student_id)),
        "meetings": list_meetings(db, student_id=student_id),
    }


def create_student(db: Session, data: StudentCreate) -> Tuple[Student, str]:
    """Create a student and their client account."""
    with transaction(db):
        student, password = add_student_record(
            db,
            first_name=data.first_name,
            middle_name=data.middle_name,
            surname=data.surname,
            email=data.email,
            mobile=data.mobile,
            address=data.address,
            country=data.country,
            dob=data.dob,
            guardian_name=data.guardian_name,
            guardian_relation=data.guardian_relation,
            guardian_mobile=data.guardian_mobile,
            guardian_email=data.guardian_email,
            source_inquiry=data.source_inquiry,
        )

    logger.info("student_created", student_id=student.id, student_code=student.student_code)
    return student, password


def update_student(db: Session, student_id: int, data: StudentUpdate) -> None:
    """Replace a student's editable fields.

    Existing meetings keep the name captured when they were booked.
    """
    with transaction(db):
        student = _get_or_404(db, student_id)
        _ensure_email_free(db, data.email, exclude_student_id=student_id)

        student.first_name = data.first_name
        student.middle_name = data.middle_name
        student.surname = data.surname
        student.name = compose_name(data.first_name, data.middle_name, data.surname)
        student.email = data.email
        student.mobile = data.mobile
        student.address = data.address
        student.country = data.country
        student.dob = data.dob
        student.guardian_name = data.guardian_name
        student.guardian_relation = data.guardian_relation
        student.guardian_mobile = data.guardian_mobile
        student.guardian_email = data.guardian_email
        student.source_inquiry = data.source_inquiry
        student.status = data.status

    logger.info("student_updated", student_id=student_id)


def delete_student(db: Session, student_id: int) -> None:
    """Delete a student with their assignments and meetings."""
    with transaction(db):
        student = _get_or_404(db, student_id)
        db.delete(student)

    logger.info("student_deleted", student_id=student_id)
