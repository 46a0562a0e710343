"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from edconsult.db.models.user import User  # noqa: F401, E402
from edconsult.db.models.sequence import Sequence  # noqa: F401, E402
from edconsult.db.models.counselor import Counselor  # noqa: F401, E402
from edconsult.db.models.lead import Lead, FollowUp, LeadChange  # noqa: F401, E402
from edconsult.db.models.student import Student  # noqa: F401, E402
from edconsult.db.models.assignment import LeadCounselor, StudentCounselor  # noqa: F401, E402
from edconsult.db.models.meeting import Meeting  # noqa: F401, E402
