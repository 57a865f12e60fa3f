"""
auth.py — Registration and Authentication Endpoints (API Layer)

Purpose:
- Register donors, log them in, and report who is logged in.
- Issues JWT access tokens; password hashing and token encoding are
  delegated to core/security.py, storage to services/store.py.

This file should be thin — minimal logic. Do NOT implement hashing or token encoding here.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import EmailStr, Field, field_validator

from lifeshare.api.v1.schemas import CamelModel, PublicUser, to_public
from lifeshare.core.database import get_store
from lifeshare.core.logging import get_logger
from lifeshare.core.security import (
    create_user_token,
    get_current_user,
    hash_password,
    verify_password,
)
from lifeshare.models.user import BloodGroup, NewUser, User
from lifeshare.services.store import DuplicateEmailError, DuplicateUsernameError, EntityStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

# -----------------------------------------------------------------------------
# Request / Response Schemas
# -----------------------------------------------------------------------------

class RegisterRequest(CamelModel):
    """
    Schema for registration POST. Accepts camelCase or snake_case keys.
    - `password`: Raw password; hashed before it reaches the store.
    - `lastDonation`: Optional, for donors who already gave elsewhere.
    """
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    blood_group: BloodGroup
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    last_donation: Optional[datetime.date] = None

    @field_validator('username', mode='before')
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('last_donation')
    @classmethod
    def not_in_future(cls, v: Optional[datetime.date]) -> Optional[datetime.date]:
        if v is not None and v > datetime.date.today():
            raise ValueError("lastDonation cannot be in the future")
        return v


class LoginRequest(CamelModel):
    """
    Schema for login POST. Both fields are checked in the route so a missing
    one gets the same 400 message as an empty one.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(CamelModel):
    """
    Response when issuing JWT access tokens.
    - `accessToken`: Encoded JWT string.
    - `tokenType`: 'bearer', for the Authorization header.
    """
    access_token: str
    token_type: str = "bearer"
    user: PublicUser


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

# bcrypt blocks, so register/login are plain `def` and run in the threadpool.

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, store: EntityStore = Depends(get_store)):
    """
    POST /auth/register

    Flow:
    1. Reject a taken username or email (400).
    2. Hash the password.
    3. Create the user and issue a token so the client is logged in at once.
    """
    if store.get_user_by_username(payload.username):
        raise HTTPException(status_code=400, detail="Username already taken")
    if store.get_user_by_email(payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = NewUser(
        username=payload.username,
        password_hash=hash_password(payload.password),
        full_name=payload.full_name,
        age=payload.age,
        email=payload.email,
        phone=payload.phone,
        blood_group=payload.blood_group.value,
        address_line1=payload.address_line1,
        address_line2=payload.address_line2,
        city=payload.city,
        state=payload.state,
        postal_code=payload.postal_code,
        last_donation=payload.last_donation,
    )

    # The store enforces uniqueness too; this covers a concurrent registration
    # slipping in between the checks above and the create.
    try:
        user = store.create_user(new_user)
    except DuplicateUsernameError:
        raise HTTPException(status_code=400, detail="Username already taken")
    except DuplicateEmailError:
        raise HTTPException(status_code=400, detail="Email already registered")

    return AuthResponse(access_token=create_user_token(user), user=to_public(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, store: EntityStore = Depends(get_store)):
    """
    POST /auth/login

    - 400 if username or password is missing.
    - 401 "Invalid credentials" for an unknown user or wrong password (same
      message for both).
    """
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    user = store.get_user_by_username(payload.username.strip())
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for username %s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return AuthResponse(access_token=create_user_token(user), user=to_public(user))


@router.post("/logout")
def logout():
    """
    POST /auth/logout

    Stateless JWT means logout is client-side only (delete the token).
    """
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=PublicUser)
def me(user: User = Depends(get_current_user)):
    """
    GET /auth/me

    The logged-in user. 401 without a valid token, 404 if the account is gone.
    """
    return to_public(user)
