# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import settings
from schemas.user import CurrentUser, UserRecord

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
RESET_TOKEN = "reset"

# Authorization scheme; missing headers are reported by us, not by HTTPBearer
bearer_scheme = HTTPBearer(auto_error=False)


def _encode(claims: dict, expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# Generate a new JWT access token carrying the caller's identity
def create_access_token(user: UserRecord, expires_delta: Optional[timedelta] = None) -> str:
    claims = {
        "sub": user.id,
        "id": user.id,
        "email": user.email,
        "isAdmin": user.is_admin,
        "type": ACCESS_TOKEN,
    }
    return _encode(claims, expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


# Short-lived token mailed out by the forgot-password flow
def create_reset_token(user: UserRecord, expires_delta: Optional[timedelta] = None) -> str:
    claims = {"sub": user.id, "type": RESET_TOKEN}
    return _encode(claims, expires_delta or timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES))


def decode_token(token: str, expected_type: str) -> dict:
    """Check signature, expiry and token type. Raises JWTError on any failure."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != expected_type or not payload.get("sub"):
        raise JWTError("Unexpected token type")
    return payload


def verify_access_token(token: str) -> CurrentUser:
    payload = decode_token(token, ACCESS_TOKEN)
    if not payload.get("email"):
        raise JWTError("Token without email")
    return CurrentUser(
        id=payload["sub"],
        email=payload["email"],
        is_admin=bool(payload.get("isAdmin", False)),
    )


# Retrieve the authenticated caller from the bearer token (no store lookup)
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_access_token(credentials.credentials)
    except JWTError:
        # Expired, tampered and malformed tokens all look the same to the caller
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )


# Secondary gate for admin-only endpoints
def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
