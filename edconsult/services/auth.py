"""User registration and login."""
from typing import Dict
from sqlalchemy.orm import Session

from edconsult.core.exceptions import ConflictError
from edconsult.core.logging_config import get_logger
from edconsult.core.security import create_access_token, get_password_hash, verify_password
from edconsult.db import transaction
from edconsult.db.models import User

logger = get_logger(__name__)


def user_to_dict(user: User) -> Dict:
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role}


def register_user(db: Session, name: str, email: str, password: str, role: str) -> User:
    """Create a user account with an Argon2 password hash."""
    with transaction(db):
        if db.query(User.id).filter(User.email == email).first():
            raise ConflictError("A user with this email already exists")

        user = User(name=name, email=email, password_hash=get_password_hash(password), role=role)
        db.add(user)
        db.flush()

    logger.info("user_registered", user_id=user.id, role=role)
    return user


def authenticate_user(db: Session, email: str, password: str):
    """
    Check credentials.

    Returns:
        (access token, user) or None when the email or password is wrong
    """
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("login_failed", email=email)
        return None

    token = create_access_token({"sub": str(user.id), "email": user.email, "role": user.role})
    logger.info("login_succeeded", user_id=user.id)
    return token, user
