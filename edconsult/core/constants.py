"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Business Hours
# Meetings must fall inside 09:00-17:00, expressed as minutes since midnight
BUSINESS_DAY_START_MINUTES = 9 * 60
BUSINESS_DAY_END_MINUTES = 17 * 60

# Meeting Duration
MIN_MEETING_DURATION_MINUTES = 15
MAX_MEETING_DURATION_MINUTES = 480

# Meeting Status
MEETING_STATUS_SCHEDULED = "Scheduled"
MEETING_STATUS_COMPLETED = "Completed"
MEETING_STATUS_CANCELLED = "Cancelled"
MEETING_STATUSES = (
    MEETING_STATUS_SCHEDULED,
    MEETING_STATUS_COMPLETED,
    MEETING_STATUS_CANCELLED,
)

# Allowed status transitions (current -> allowed next states)
MEETING_STATUS_TRANSITIONS = {
    MEETING_STATUS_SCHEDULED: (MEETING_STATUS_COMPLETED, MEETING_STATUS_CANCELLED),
    MEETING_STATUS_COMPLETED: (),
    MEETING_STATUS_CANCELLED: (),
}

# Meeting subjects
SUBJECT_LEAD = "lead"
SUBJECT_STUDENT = "student"

# User roles
ROLE_ADMIN = "admin"
ROLE_CONSULTANT = "consultant"
ROLE_CLIENT = "client"
STAFF_ROLES = (ROLE_ADMIN, ROLE_CONSULTANT)

# Display ID formats
COUNSELOR_CODE_PREFIX = "COUN"
STUDENT_CODE_PREFIX = "STU"
DISPLAY_ID_DIGITS = 3

# Generated password length for students registered from leads
GENERATED_PASSWORD_LENGTH = 12

# JWT Token Configuration
# Token expiration time in minutes (24 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 1440
