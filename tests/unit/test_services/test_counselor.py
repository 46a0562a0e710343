"""Unit tests for counselor business logic."""
import pytest

from edconsult.core.exceptions import ConflictError, NotFoundError
from edconsult.db.models import Counselor, LeadCounselor, Meeting
from edconsult.schemas import CounselorCreate, CounselorUpdate
from edconsult.services.counselor import (
    create_counselor,
    delete_counselor,
    get_counselor,
    get_counselors,
    update_counselor,
)
from tests.utils import add_lead, add_meeting, assign


def _payload(**overrides):
    data = {
        "name": "Priya Sharma",
        "email": "Priya@Example.com",
        "phone": "9876543210",
        "experience": "5 years",
        "expertise": "UK admissions",
    }
    data.update(overrides)
    return data


@pytest.mark.unit
class TestCounselorService:
    """Test counselor CRUD."""

    def test_create_generates_codes(self, db_session):
        first = create_counselor(db_session, CounselorCreate(**_payload()))
        second = create_counselor(db_session, CounselorCreate(**_payload(email="omar@example.com")))

        assert first.counselor_code == "COUN001"
        assert second.counselor_code == "COUN002"
        assert first.email == "priya@example.com"

    def test_duplicate_email(self, db_session):
        create_counselor(db_session, CounselorCreate(**_payload()))

        with pytest.raises(ConflictError, match="already exists"):
            create_counselor(db_session, CounselorCreate(**_payload(name="Someone Else")))
        assert db_session.query(Counselor).count() == 1

    def test_list_with_meeting_counts(self, db_session):
        counselor = create_counselor(db_session, CounselorCreate(**_payload()))
        create_counselor(db_session, CounselorCreate(**_payload(email="omar@example.com")))
        lead = add_lead(db_session)
        add_meeting(db_session, counselor, lead, "10:00", 30)
        add_meeting(db_session, counselor, lead, "11:00", 30, status="Completed")
        add_meeting(db_session, counselor, lead, "12:00", 30, status="Cancelled")

        counts = {c["counselor_code"]: c for c in get_counselors(db_session)}

        assert counts["COUN001"]["total_meetings"] == 3
        assert counts["COUN001"]["scheduled_meetings"] == 1
        assert counts["COUN001"]["completed_meetings"] == 1
        assert counts["COUN002"]["total_meetings"] == 0

    def test_get_includes_meetings(self, db_session):
        counselor = create_counselor(db_session, CounselorCreate(**_payload()))
        lead = add_lead(db_session)
        add_meeting(db_session, counselor, lead, "10:00", 30)

        data = get_counselor(db_session, counselor.id)

        assert data["total_meetings"] == 1
        assert data["meetings"][0]["subject_name"] == "Sam Lee"

    def test_update_rejects_taken_email(self, db_session):
        create_counselor(db_session, CounselorCreate(**_payload()))
        other = create_counselor(db_session, CounselorCreate(**_payload(email="omar@example.com")))

        with pytest.raises(ConflictError, match="another counselor"):
            update_counselor(db_session, other.id, CounselorUpdate(**_payload()))

    def test_update(self, db_session):
        counselor = create_counselor(db_session, CounselorCreate(**_payload()))

        update_counselor(db_session, counselor.id, CounselorUpdate(**_payload(status="Inactive")))

        assert get_counselor(db_session, counselor.id)["status"] == "Inactive"

    def test_delete_cascades(self, db_session):
        counselor = create_counselor(db_session, CounselorCreate(**_payload()))
        lead = add_lead(db_session)
        assign(db_session, counselor, lead=lead)
        add_meeting(db_session, counselor, lead, "10:00", 30)

        delete_counselor(db_session, counselor.id)

        assert db_session.query(Counselor).count() == 0
        assert db_session.query(Meeting).count() == 0
        assert db_session.query(LeadCounselor).count() == 0

    def test_missing(self, db_session):
        with pytest.raises(NotFoundError):
            get_counselor(db_session, 1)
        with pytest.raises(NotFoundError):
            delete_counselor(db_session, 1)
