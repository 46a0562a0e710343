from .assignment import (
    SubjectRef,
    assign_counselor,
    get_assigned_counselors,
    get_subject,
    is_assigned,
    unassign_counselor,
)
from .availability import TimeSlot, get_booked_slots
from .meeting import delete_meeting, get_meeting, list_meetings, update_meeting_status
from .scheduling import ScheduledMeeting, schedule_meeting

__all__ = [
    # assignments
    "SubjectRef",
    "assign_counselor",
    "get_assigned_counselors",
    "get_subject",
    "is_assigned",
    "unassign_counselor",
    # availability
    "TimeSlot",
    "get_booked_slots",
    # meetings
    "delete_meeting",
    "get_meeting",
    "list_meetings",
    "update_meeting_status",
    # scheduling
    "ScheduledMeeting",
    "schedule_meeting",
]
