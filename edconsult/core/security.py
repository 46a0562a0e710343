"""Security and authentication utilities."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import argon2
import jwt
from fastapi import HTTPException, Request

from edconsult.core import config
from edconsult.core.constants import ROLE_ADMIN, STAFF_ROLES

# Argon2 hasher for user passwords
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT, mapping failures to 401 responses."""
    try:
        return jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired. Please login again.")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")


def get_bearer_token(request: Request) -> str:
    """Extract the token from an ``Authorization: Bearer`` header."""
    auth_header = request.headers.get("Authorization", "")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authentication required")

    return auth_header[len("Bearer "):]


def verify_token(request: Request) -> dict:
    """Verify the bearer token and return its payload."""
    return decode_access_token(get_bearer_token(request))


def verify_staff_token(request: Request) -> dict:
    """Verify the bearer token belongs to an admin or consultant."""
    payload = verify_token(request)
    if payload.get("role") not in STAFF_ROLES:
        raise HTTPException(status_code=403, detail="Access denied. Insufficient permissions.")
    return payload


def require_admin_token(request: Request) -> dict:
    """Verify the bearer token belongs to an admin."""
    payload = verify_token(request)
    if payload.get("role") != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Only an admin can create staff accounts")
    return payload
