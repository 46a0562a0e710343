"""Shared API dependencies."""
from edconsult.db import get_db, get_db_context
from edconsult.core.security import require_admin_token, verify_staff_token, verify_token

__all__ = ["get_db", "get_db_context", "require_admin_token", "verify_staff_token", "verify_token"]
