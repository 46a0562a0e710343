"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from edconsult.api.deps import get_db, require_admin_token, verify_token
from edconsult.core.constants import STAFF_ROLES
from edconsult.core.rate_limit import limiter, RATE_LIMITS
from edconsult.db.models import User
from edconsult.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
    VerifyResponse,
)
from edconsult.services.auth import authenticate_user, register_user, user_to_dict

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(RATE_LIMITS["register"])
def register_endpoint(request: Request, body: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a user account.

    Anyone may register a client account. Admin and consultant accounts
    need an admin bearer token; ``edconsult-create-user`` creates the first
    admin.

    Example:
        Request:
            POST /api/v1/auth/register
            Authorization: Bearer <admin token>
            {"name": "Ayesha Khan", "email": "ayesha@example.com",
             "password": "secret1", "role": "consultant"}

        Response (201):
            {"success": true, "message": "User registered successfully", "userId": 3}

        Response (401):
            {"success": false, "message": "Authentication required"}

        Response (409):
            {"success": false, "message": "A user with this email already exists"}
    """
    if body.role in STAFF_ROLES:
        require_admin_token(request)

    user = register_user(db, body.name, body.email, body.password, body.role)
    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMITS["login"])
def login_endpoint(request: Request, body: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email and password for a bearer token.

    The token is sent back on later requests as
    ``Authorization: Bearer <token>`` and expires after
    ACCESS_TOKEN_EXPIRE_MINUTES (24 hours by default).
    """
    result = authenticate_user(db, body.email, body.password)
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token, user = result
    return LoginResponse(message="Login successful", token=token, user=UserInfo(**user_to_dict(user)))


@router.get("/verify", response_model=VerifyResponse)
def verify_endpoint(payload: dict = Depends(verify_token), db: Session = Depends(get_db)):
    """Check a bearer token and return the user it belongs to."""
    user = db.query(User).filter(User.id == int(payload.get("sub", 0))).first()
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return VerifyResponse(user=UserInfo(**user_to_dict(user)))
