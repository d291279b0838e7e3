# backend/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError

from config import settings
from schemas import user as schemas
from storage.base import ConflictError, Storage
from storage.factory import get_storage
from utils.hashing import verify_password
from utils.mailer import MailClient, get_mail_client
from utils.tokenJWT import (
    RESET_TOKEN,
    create_access_token,
    create_reset_token,
    decode_token,
    get_current_user,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

RESET_MAIL_SENT = "If the email is registered, a reset link has been sent"


def _auth_response(user: schemas.UserRecord) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        token=create_access_token(user),
        user=schemas.UserPublic.model_validate(user),
    )


# Register a new (non-admin) user and log them in
@router.post("/register", response_model=schemas.AuthResponse)
def register(payload: schemas.UserCreate, storage: Storage = Depends(get_storage)):
    try:
        user = storage.create_user(payload)
    except ConflictError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    return _auth_response(user)


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.UserLogin, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_email(payload.email)

    # Same answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return _auth_response(user)


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserProfile)
def me(
    current_user: schemas.CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user(current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return schemas.UserProfile.model_validate(user)


@router.post("/forgot-password")
def forgot_password(
    payload: schemas.ForgotPasswordRequest,
    storage: Storage = Depends(get_storage),
    mailer: MailClient = Depends(get_mail_client),
):
    user = storage.get_user_by_email(payload.email)
    if user:
        token = create_reset_token(user)
        link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
        sent = mailer.send(
            to=user.email,
            subject="Reset your password",
            html=(
                "<h2>Reset your password</h2>"
                "<p>Click the link below to choose a new password:</p>"
                f'<a href="{link}">Reset password</a>'
                "<p>This link expires in 1 hour.</p>"
            ),
        )
        if not sent:
            raise HTTPException(status_code=500, detail="Error sending email")
    return {"message": RESET_MAIL_SENT}


@router.post("/reset-password")
def reset_password(payload: schemas.ResetPasswordRequest, storage: Storage = Depends(get_storage)):
    try:
        claims = decode_token(payload.token, RESET_TOKEN)
    except JWTError:
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")

    if not storage.set_user_password(claims["sub"], payload.password):
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")
    return {"message": "Password updated"}
