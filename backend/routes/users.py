# backend/routes/users.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from schemas.user import AboutUpdate, CurrentUser, PublicProfile, UserProfile, UserProfileEnvelope
from storage.base import Storage
from storage.factory import get_storage
from utils.tokenJWT import get_current_user
from utils.uploads import save_upload

router = APIRouter(prefix="/api", tags=["Profile"])


def _apply_updates(storage: Storage, user_id: str, updates: dict) -> UserProfileEnvelope:
    user = storage.update_user(user_id, updates)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserProfileEnvelope(user=UserProfile.model_validate(user))


# Update name and/or avatar and about photo (multipart)
@router.patch("/user/profile", response_model=UserProfileEnvelope)
def update_profile(
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    name: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    about_photo: Optional[UploadFile] = File(None, alias="aboutPhoto"),
):
    updates = {}
    avatar_url = save_upload(avatar)
    if avatar_url:
        updates["avatar"] = avatar_url
    about_photo_url = save_upload(about_photo)
    if about_photo_url:
        updates["about_photo"] = about_photo_url
    if name:
        updates["name"] = name
    return _apply_updates(storage, current_user.id, updates)


@router.patch("/user/about-photo", response_model=UserProfileEnvelope)
def update_about_photo(
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    about_photo: Optional[UploadFile] = File(None, alias="aboutPhoto"),
):
    url = save_upload(about_photo)
    if not url:
        raise HTTPException(status_code=400, detail="No photo file provided")
    return _apply_updates(storage, current_user.id, {"about_photo": url})


# Update the free-text "about" section and skills
@router.patch("/user/about", response_model=UserProfileEnvelope)
def update_about(
    payload: AboutUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("skills") is None:
        updates.pop("skills", None)  # column is not nullable
    return _apply_updates(storage, current_user.id, updates)


# Public landing-page profile (the administrator's)
@router.get("/profile", response_model=PublicProfile)
def get_public_profile(storage: Storage = Depends(get_storage)):
    admin = storage.get_admin_user()
    if not admin:
        raise HTTPException(status_code=404, detail="Profile not found")
    return PublicProfile.model_validate(admin)
