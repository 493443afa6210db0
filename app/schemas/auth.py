from typing import Optional

from app.models.user import UserRole
from app.schemas.common import CamelModel


class UserRegister(CamelModel):
    # Presence is checked by the credential store so every missing field
    # yields the same "fill in all required fields" message
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    role: Optional[str] = None


class UserLogin(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(CamelModel):
    """Account view returned by register and login; the password hash has no field here"""
    id: str
    full_name: str
    email: str
    role: UserRole
