"""Unit tests for the conflict-checked scheduler."""
import pytest
from itertools import combinations
from sqlalchemy.dialects import postgresql

from edconsult.core.exceptions import ConflictError, NotFoundError, ValidationError
from edconsult.db.models import LeadCounselor, Meeting
from edconsult.services.assignment import SubjectRef
from edconsult.services.availability import get_booked_slots
from edconsult.services.scheduling import counselor_lock_query, schedule_meeting
from edconsult.core.utils import intervals_overlap
from tests.utils import MEETING_DAY, add_counselor, add_lead, add_meeting, add_student, assign


@pytest.fixture
def booking(db_session):
    """A counselor assigned to a lead, ready to book."""
    counselor = add_counselor(db_session)
    lead = add_lead(db_session)
    assign(db_session, counselor, lead=lead)
    return counselor, lead


def _book(db_session, counselor, lead, start, duration, day="2024-06-01"):
    return schedule_meeting(
        db_session,
        counselor_id=counselor.id,
        subject=SubjectRef("lead", lead.id),
        meeting_date=day,
        meeting_time=start,
        duration_minutes=duration,
    )


@pytest.mark.unit
class TestScheduleMeeting:
    """Test booking outcomes for well-formed requests."""

    def test_first_booking_of_the_day(self, db_session, booking):
        """10:00 for 30 minutes on an empty day is booked and shows as 600-630."""
        counselor, lead = booking

        result = _book(db_session, counselor, lead, "10:00", 30)

        assert result.subject_name == "Sam Lee"
        assert (result.start, result.end) == (600, 630)
        slots = get_booked_slots(db_session, counselor.id, "2024-06-01")
        assert [(s.start, s.end) for s in slots] == [(600, 630)]

        meeting = db_session.query(Meeting).filter(Meeting.id == result.meeting_id).one()
        assert meeting.status == "Scheduled"
        assert meeting.lead_id == lead.id
        assert meeting.student_id is None

    def test_overlapping_booking_rejected(self, db_session, booking):
        """10:15-10:45 collides with 10:00-10:30 and names the existing meeting."""
        counselor, lead = booking
        _book(db_session, counselor, lead, "10:00", 30)

        with pytest.raises(ConflictError) as exc_info:
            _book(db_session, counselor, lead, "10:15", 30)

        assert "10:00" in exc_info.value.message
        assert "30" in exc_info.value.message
        assert db_session.query(Meeting).count() == 1

    def test_start_before_business_hours(self, db_session, booking):
        counselor, lead = booking

        with pytest.raises(ValidationError, match="before business hours"):
            _book(db_session, counselor, lead, "08:30", 30)

    def test_end_after_business_hours(self, db_session, booking):
        counselor, lead = booking

        with pytest.raises(ValidationError, match="ends after business hours"):
            _book(db_session, counselor, lead, "16:45", 30)

    def test_duration_over_cap(self, db_session, booking):
        """600 minutes fails on duration whatever the start time."""
        counselor, lead = booking

        for start in ("09:00", "12:00", "08:00"):
            with pytest.raises(ValidationError, match="duration out of range"):
                _book(db_session, counselor, lead, start, 600)

    def test_last_slot_of_the_day(self, db_session, booking):
        """16:45 for 15 minutes ends exactly at 17:00 and is allowed."""
        counselor, lead = booking

        result = _book(db_session, counselor, lead, "16:45", 15)

        assert (result.start, result.end) == (1005, 1020)

    def test_first_slot_of_the_day(self, db_session, booking):
        counselor, lead = booking
        result = _book(db_session, counselor, lead, "09:00", 480)
        assert (result.start, result.end) == (540, 1020)

    def test_back_to_back_meetings(self, db_session, booking):
        counselor, lead = booking
        _book(db_session, counselor, lead, "10:00", 30)
        _book(db_session, counselor, lead, "10:30", 30)
        _book(db_session, counselor, lead, "09:30", 30)

        slots = get_booked_slots(db_session, counselor.id, "2024-06-01")
        assert [(s.start, s.end) for s in slots] == [(570, 600), (600, 630), (630, 660)]

    def test_containing_booking_rejected(self, db_session, booking):
        counselor, lead = booking
        _book(db_session, counselor, lead, "11:00", 15)

        with pytest.raises(ConflictError, match="11:00 \\(15 minutes\\)"):
            _book(db_session, counselor, lead, "10:30", 120)

    def test_other_day_does_not_conflict(self, db_session, booking):
        counselor, lead = booking
        _book(db_session, counselor, lead, "10:00", 30)
        _book(db_session, counselor, lead, "10:00", 30, day="2024-06-02")
        assert db_session.query(Meeting).count() == 2

    def test_other_counselor_does_not_conflict(self, db_session, booking):
        counselor, lead = booking
        other = add_counselor(db_session, email="omar@example.com", code="COUN002", name="Omar Haddad")
        assign(db_session, other, lead=lead)

        _book(db_session, counselor, lead, "10:00", 30)
        _book(db_session, other, lead, "10:00", 30)
        assert db_session.query(Meeting).count() == 2

    def test_cancelled_meeting_frees_slot(self, db_session, booking):
        counselor, lead = booking
        add_meeting(db_session, counselor, lead, "10:00", 60, status="Cancelled")

        result = _book(db_session, counselor, lead, "10:00", 60)
        assert result.start == 600

    def test_completed_meeting_still_blocks(self, db_session, booking):
        counselor, lead = booking
        add_meeting(db_session, counselor, lead, "10:00", 60, status="Completed")

        with pytest.raises(ConflictError):
            _book(db_session, counselor, lead, "10:30", 30)

    def test_student_booking_snapshots_code(self, db_session):
        counselor = add_counselor(db_session)
        student = add_student(db_session)
        assign(db_session, counselor, student=student)

        result = schedule_meeting(
            db_session,
            counselor_id=counselor.id,
            subject=SubjectRef("student", student.id),
            meeting_date=MEETING_DAY,
            meeting_time="14:00",
            duration_minutes=45,
            notes="  Discuss <b>visa</b> timeline ",
        )

        meeting = db_session.query(Meeting).filter(Meeting.id == result.meeting_id).one()
        assert result.subject_name == "Mira Patel"
        assert meeting.student_code == "STU2024001"
        assert meeting.student_id == student.id
        assert meeting.notes == "Discuss visa timeline"


@pytest.mark.unit
class TestScheduleMeetingValidationOrder:
    """Test which check fails first and that nothing is written on failure."""

    def test_missing_fields_named(self, db_session, booking):
        counselor, lead = booking

        with pytest.raises(ValidationError, match="meetingTime, durationMinutes"):
            schedule_meeting(
                db_session,
                counselor_id=counselor.id,
                subject=SubjectRef("lead", lead.id),
                meeting_date="2024-06-01",
                meeting_time="",
                duration_minutes=None,
            )

    @pytest.mark.parametrize("duration", [0, 14, 481, 600])
    def test_duration_bounds(self, db_session, booking, duration):
        counselor, lead = booking
        with pytest.raises(ValidationError, match="duration out of range"):
            _book(db_session, counselor, lead, "10:00", duration)

    @pytest.mark.parametrize("duration", [15, 480])
    def test_duration_bounds_inclusive(self, db_session, booking, duration):
        counselor, lead = booking
        _book(db_session, counselor, lead, "09:00", duration)

    def test_duration_checked_before_assignment(self, db_session):
        counselor = add_counselor(db_session)
        lead = add_lead(db_session)

        with pytest.raises(ValidationError, match="duration out of range"):
            _book(db_session, counselor, lead, "10:00", 5)

    def test_unassigned_counselor(self, db_session):
        counselor = add_counselor(db_session)
        lead = add_lead(db_session)

        with pytest.raises(ValidationError, match="not assigned to this lead"):
            _book(db_session, counselor, lead, "10:00", 30)

    def test_assignment_checked_before_time_format(self, db_session):
        counselor = add_counselor(db_session)
        lead = add_lead(db_session)

        with pytest.raises(ValidationError, match="not assigned"):
            _book(db_session, counselor, lead, "ten o'clock", 30)

    def test_missing_subject(self, db_session):
        counselor = add_counselor(db_session)
        db_session.add(LeadCounselor(lead_id=999, counselor_id=counselor.id))
        db_session.commit()

        with pytest.raises(NotFoundError, match="Lead not found"):
            schedule_meeting(
                db_session,
                counselor_id=counselor.id,
                subject=SubjectRef("lead", 999),
                meeting_date="2024-06-01",
                meeting_time="10:00",
                duration_minutes=30,
            )

    def test_missing_counselor(self, db_session):
        lead = add_lead(db_session)
        db_session.add(LeadCounselor(lead_id=lead.id, counselor_id=999))
        db_session.commit()

        with pytest.raises(NotFoundError, match="Counselor not found"):
            schedule_meeting(
                db_session,
                counselor_id=999,
                subject=SubjectRef("lead", lead.id),
                meeting_date="2024-06-01",
                meeting_time="10:00",
                duration_minutes=30,
            )
        assert db_session.query(Meeting).count() == 0

    def test_malformed_time(self, db_session, booking):
        counselor, lead = booking
        with pytest.raises(ValidationError, match="expected HH:MM"):
            _book(db_session, counselor, lead, "25:00", 30)

    def test_malformed_date(self, db_session, booking):
        counselor, lead = booking
        with pytest.raises(ValidationError, match="expected YYYY-MM-DD"):
            _book(db_session, counselor, lead, "10:00", 30, day="06/01/2024")

    def test_non_integer_duration(self, db_session, booking):
        counselor, lead = booking
        with pytest.raises(ValidationError, match="whole number"):
            _book(db_session, counselor, lead, "10:00", "30")

    def test_unknown_subject_type(self):
        with pytest.raises(ValidationError, match="Unknown subject type"):
            SubjectRef("visitor", 1)


@pytest.mark.unit
class TestSchedulingProperties:
    """Test invariants over many booking attempts."""

    def test_accepted_meetings_never_overlap_and_stay_in_hours(self, db_session, booking):
        counselor, lead = booking
        accepted = []

        for start in range(480, 1080, 15):
            for duration in (15, 45, 90):
                hhmm = f"{start // 60:02d}:{start % 60:02d}"
                try:
                    result = _book(db_session, counselor, lead, hhmm, duration)
                except (ConflictError, ValidationError):
                    continue
                accepted.append((result.start, result.end))

        assert accepted
        for start, end in accepted:
            assert start >= 540
            assert end <= 1020
        for a, b in combinations(accepted, 2):
            assert not intervals_overlap(*a, *b)

    def test_booked_interval_listed_exactly_once(self, db_session, booking):
        counselor, lead = booking
        _book(db_session, counselor, lead, "13:00", 45)
        _book(db_session, counselor, lead, "09:15", 30)

        slots = [(s.start, s.end) for s in get_booked_slots(db_session, counselor.id, "2024-06-01")]
        assert slots.count((780, 825)) == 1
        assert slots.count((555, 585)) == 1

    def test_lock_query_selects_for_update(self, db_session):
        """The counselor row is locked before the overlap read."""
        query = counselor_lock_query(db_session, 1)
        sql = str(query.statement.compile(dialect=postgresql.dialect()))
        assert "FOR UPDATE" in sql
