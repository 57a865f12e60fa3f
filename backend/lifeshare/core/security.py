"""
security.py — Authentication Utilities (Password Hashing & JWT Encoding)

Purpose:
- Provide reusable security helpers across the backend.
- Hash & verify passwords (never store raw passwords).
- Issue and validate JWT access tokens for authentication.
- Resolve the current user from the `Authorization: Bearer <token>` header.

Key Constraints:
- Access tokens only (no refresh tokens).
- Authentication is stateless — logout just means deleting the token client-side.

This module does NOT:
- Define API routes → that lives in lifeshare/api/v1/auth.py
- Touch storage except through the injected EntityStore
"""

import datetime
from typing import Optional, Dict, Any

from jose import jwt, JWTError  # `python-jose` library
from passlib.context import CryptContext  # password hashing
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from lifeshare.core.config import settings
from lifeshare.core.database import get_store
from lifeshare.core.logging import get_logger
from lifeshare.models.user import User
from lifeshare.services.store import EntityStore

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Password Hashing
# -----------------------------------------------------------------------------

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

def hash_password(raw_password: str) -> str:
    """
    Hash a plaintext password using bcrypt.
    """
    return pwd_context.hash(raw_password)

def verify_password(raw_password: str, hashed_password: str) -> bool:
    """
    Verify that a raw password matches its hashed stored version.
    """
    return pwd_context.verify(raw_password, hashed_password)


# -----------------------------------------------------------------------------
# JWT Token Handling
# -----------------------------------------------------------------------------

def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """
    Create a JWT access token with expiration.

    Expected payload format:
        data = {"sub": str(user_id)}

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    expire_at = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes)
    to_encode.update({"exp": expire_at})

    token = jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return token


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT token.
    Returns the payload dict if valid, None if invalid or expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def create_user_token(user: User) -> str:
    # python-jose requires "sub" to be a string
    return create_access_token({"sub": str(user.id)})


# -----------------------------------------------------------------------------
# Current User Dependencies
# -----------------------------------------------------------------------------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_UNAUTHORIZED = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Unauthorized",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    """
    Decode the bearer token and return the user id in its 'sub' claim.

    Raises 401 if the token is missing, malformed, expired or carries no
    usable subject.
    """
    payload = decode_token(token)
    if not payload:
        raise _UNAUTHORIZED

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.warning("Rejected token with invalid subject")
        raise _UNAUTHORIZED


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    store: EntityStore = Depends(get_store),
) -> User:
    """
    Return the authenticated user.

    Flow:
    - Decode token (get_current_user_id).
    - Lookup user in the store.
    - 404 if the token is valid but the user no longer exists.
    """
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
