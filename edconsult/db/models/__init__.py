"""Database models."""
from edconsult.db.models.user import User
from edconsult.db.models.sequence import Sequence
from edconsult.db.models.counselor import Counselor
from edconsult.db.models.lead import Lead, FollowUp, LeadChange
from edconsult.db.models.student import Student
from edconsult.db.models.assignment import LeadCounselor, StudentCounselor
from edconsult.db.models.meeting import Meeting

__all__ = [
    "User",
    "Sequence",
    "Counselor",
    "Lead",
    "FollowUp",
    "LeadChange",
    "Student",
    "LeadCounselor",
    "StudentCounselor",
    "Meeting",
]
