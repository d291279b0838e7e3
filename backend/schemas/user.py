# backend/schemas/user.py

from typing import List, Optional

from pydantic import EmailStr, Field

from schemas.base import ORMBase, UTCDateTime


# Full stored record, password hash included. Never returned by the API.
class UserRecord(ORMBase):
    id: str
    email: str
    password_hash: str
    name: str
    avatar: Optional[str] = None
    about_photo: Optional[str] = None
    about_text: Optional[str] = None
    about_description: Optional[str] = None
    hero_subtitle: Optional[str] = None
    skills: List[str] = []
    is_admin: bool = False
    created_at: UTCDateTime


# Schema for user authentication credentials
class UserLogin(ORMBase):
    email: EmailStr
    password: str = Field(min_length=1)


# Schema for user registration requests; profile fields are edited after sign-up
class UserCreate(ORMBase):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)


# Projection returned alongside a token
class UserPublic(ORMBase):
    id: str
    email: str
    name: str
    avatar: Optional[str] = None
    is_admin: bool


# Profile as returned to its owner after an update
class UserProfile(UserPublic):
    about_photo: Optional[str] = None
    about_text: Optional[str] = None
    about_description: Optional[str] = None
    hero_subtitle: Optional[str] = None
    skills: List[str] = []


class UserProfileEnvelope(ORMBase):
    user: UserProfile


# What anonymous visitors see on the landing page (the admin's profile)
class PublicProfile(ORMBase):
    name: str
    avatar: Optional[str] = None
    about_photo: Optional[str] = None
    about_text: Optional[str] = None
    about_description: Optional[str] = None
    hero_subtitle: Optional[str] = None
    skills: List[str] = []


class AboutUpdate(ORMBase):
    about_text: Optional[str] = None
    about_description: Optional[str] = None
    hero_subtitle: Optional[str] = None
    skills: Optional[List[str]] = None


# Schema for JWT authentication response
class AuthResponse(ORMBase):
    token: str
    user: UserPublic


# Identity carried by a verified access token
class CurrentUser(ORMBase):
    id: str
    email: str
    is_admin: bool = False


class ForgotPasswordRequest(ORMBase):
    email: EmailStr


class ResetPasswordRequest(ORMBase):
    token: str
    password: str = Field(min_length=1)
