"""Row-lock behaviour against a real PostgreSQL server.

SQLite ignores ``FOR UPDATE``, so these tests start a throwaway Postgres
container. They are skipped unless EDCONSULT_POSTGRES_TESTS=1 (``nox -s postgres``).
"""
import os
import threading
from datetime import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from edconsult.core.exceptions import ConflictError
from edconsult.db.base import Base
from edconsult.db.models import Meeting, Sequence
from edconsult.services.assignment import SubjectRef
from edconsult.services.scheduling import counselor_lock_query, schedule_meeting
from edconsult.services.sequence import next_value
from tests.utils import MEETING_DAY, add_counselor, add_lead, assign

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(
        os.getenv("EDCONSULT_POSTGRES_TESTS") != "1",
        reason="set EDCONSULT_POSTGRES_TESTS=1 to run against a Postgres container",
    ),
]

# Long enough for a blocked worker to have reached its lock wait
BLOCKED_WAIT_SECONDS = 1.0


@pytest.fixture(scope="module")
def pg_engine():
    """Spin up a Postgres container once for this module."""
    testcontainers_postgres = pytest.importorskip("testcontainers.postgres")
    with testcontainers_postgres.PostgresContainer("postgres:15-alpine") as postgres:
        engine = create_engine(postgres.get_connection_url())
        Base.metadata.create_all(bind=engine)
        yield engine
        engine.dispose()


@pytest.fixture
def open_session(pg_engine):
    """Factory for independent sessions, each on its own connection."""
    factory = sessionmaker(autocommit=False, autoflush=False, bind=pg_engine)
    opened = []

    def _open():
        session = factory()
        opened.append(session)
        return session

    yield _open

    for session in opened:
        session.rollback()
        session.close()
    with pg_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


def _run_in_thread(target):
    outcome = {}

    def runner():
        try:
            outcome["result"] = target()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=runner, daemon=True)
    worker.start()
    return worker, outcome


class TestCounselorRowLock:
    """Concurrent bookings for one counselor are serialized."""

    def test_second_booking_waits_then_sees_first(self, open_session):
        setup = open_session()
        counselor = add_counselor(setup)
        lead = add_lead(setup)
        assign(setup, counselor, lead=lead)
        counselor_id, lead_id, lead_name = counselor.id, lead.id, lead.full_name

        first = open_session()
        counselor_lock_query(first, counselor_id).one()
        first.add(Meeting(
            counselor_id=counselor_id,
            lead_id=lead_id,
            subject_name=lead_name,
            meeting_date=MEETING_DAY,
            meeting_time=time(10, 0),
            duration_minutes=60,
            status="Scheduled",
        ))
        first.flush()

        worker, outcome = _run_in_thread(lambda: schedule_meeting(
            open_session(),
            counselor_id=counselor_id,
            subject=SubjectRef("lead", lead_id),
            meeting_date=MEETING_DAY.isoformat(),
            meeting_time="10:30",
            duration_minutes=30,
        ))

        worker.join(timeout=BLOCKED_WAIT_SECONDS)
        assert worker.is_alive(), "booking did not wait for the counselor lock"

        first.commit()
        worker.join(timeout=10)

        assert not worker.is_alive()
        assert "result" not in outcome
        assert isinstance(outcome["error"], ConflictError)
        assert "10:00 (60 minutes)" in str(outcome["error"])

        check = open_session()
        assert check.query(Meeting).filter(Meeting.counselor_id == counselor_id).count() == 1

    def test_other_counselor_is_not_blocked(self, open_session):
        setup = open_session()
        busy = add_counselor(setup)
        free = add_counselor(setup, email="omar@example.com", code="COUN002", name="Omar Haddad")
        lead = add_lead(setup)
        assign(setup, free, lead=lead)
        busy_id, free_id, lead_id = busy.id, free.id, lead.id

        holder = open_session()
        counselor_lock_query(holder, busy_id).one()

        worker, outcome = _run_in_thread(lambda: schedule_meeting(
            open_session(),
            counselor_id=free_id,
            subject=SubjectRef("lead", lead_id),
            meeting_date=MEETING_DAY.isoformat(),
            meeting_time="10:00",
            duration_minutes=30,
        ))
        worker.join(timeout=10)

        assert not worker.is_alive()
        assert outcome["result"].start == 600
        holder.rollback()


class TestSequenceFirstUse:
    """Two first calls for a new counter name get distinct values."""

    def test_concurrent_first_use(self, open_session):
        first = open_session()
        assert next_value(first, "student:2031") == 1

        second = open_session()

        def advance():
            value = next_value(second, "student:2031")
            second.commit()
            return value

        worker, outcome = _run_in_thread(advance)
        worker.join(timeout=BLOCKED_WAIT_SECONDS)
        assert worker.is_alive(), "second caller did not wait for the first"

        first.commit()
        worker.join(timeout=10)

        assert not worker.is_alive()
        assert outcome == {"result": 2}
        check = open_session()
        assert check.query(Sequence).filter(Sequence.name == "student:2031").one().value == 2
