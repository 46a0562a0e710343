"""Student endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from edconsult.api.deps import get_db, verify_staff_token
from edconsult.core.constants import SUBJECT_STUDENT
from edconsult.schemas import (
    AssignCounselorRequest,
    Credentials,
    MeetingCreate,
    MeetingCreateResponse,
    StudentCreate,
    StudentCreateResponse,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
    SuccessResponse,
)
from edconsult.services.assignment import SubjectRef, assign_counselor, unassign_counselor
from edconsult.services.student import (
    create_student,
    delete_student,
    get_student,
    get_students,
    update_student,
)
from edconsult.api.v1.endpoints.meetings import book_meeting

router = APIRouter(prefix="/students", dependencies=[Depends(verify_staff_token)])


@router.get("", response_model=StudentListResponse)
def list_students_endpoint(db: Session = Depends(get_db)):
    """List students with counselor and meeting counts."""
    students = get_students(db)
    return StudentListResponse(students=students, total=len(students))


@router.get("/{student_id}", response_model=StudentResponse)
def get_student_endpoint(student_id: int, db: Session = Depends(get_db)):
    return StudentResponse(**get_student(db, student_id))


@router.post("", response_model=StudentCreateResponse, status_code=201)
def create_student_endpoint(body: StudentCreate, db: Session = Depends(get_db)):
    """
    Create a student and a client login for them.

    The student ID is generated per year (STU2024001, STU2024002, ...).
    The generated password is only returned in this response.
    """
    student, password = create_student(db, body)
    return StudentCreateResponse(
        message="Student created successfully",
        student_id=student.id,
        generated_student_id=student.student_code,
        credentials=Credentials(email=student.email, password=password),
    )


@router.put("/{student_id}", response_model=SuccessResponse)
def update_student_endpoint(student_id: int, body: StudentUpdate, db: Session = Depends(get_db)):
    update_student(db, student_id, body)
    return SuccessResponse(message="Student updated successfully")


@router.delete("/{student_id}", response_model=SuccessResponse)
def delete_student_endpoint(student_id: int, db: Session = Depends(get_db)):
    delete_student(db, student_id)
    return SuccessResponse(message="Student deleted successfully")


@router.post("/{student_id}/assign-counselor", response_model=SuccessResponse, status_code=201)
def assign_counselor_endpoint(student_id: int, body: AssignCounselorRequest, db: Session = Depends(get_db)):
    assign_counselor(db, body.counselor_id, SubjectRef(SUBJECT_STUDENT, student_id))
    return SuccessResponse(message="Counselor assigned successfully")


@router.delete("/{student_id}/counselors/{counselor_id}", response_model=SuccessResponse)
def unassign_counselor_endpoint(student_id: int, counselor_id: int, db: Session = Depends(get_db)):
    unassign_counselor(db, counselor_id, SubjectRef(SUBJECT_STUDENT, student_id))
    return SuccessResponse(message="Counselor unassigned successfully")


@router.post("/{student_id}/meetings", response_model=MeetingCreateResponse, status_code=201)
def schedule_student_meeting_endpoint(student_id: int, body: MeetingCreate, db: Session = Depends(get_db)):
    """Book a meeting between a student and one of their assigned counselors."""
    return book_meeting(db, SubjectRef(SUBJECT_STUDENT, student_id), body)
