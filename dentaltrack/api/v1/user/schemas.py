"""
Schémas Pydantic pour le module User.
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict

from dentaltrack.api.v1.dependencies import PageMeta
from dentaltrack.models.enums import UserRole


USER_PERMISSIONS = ["manage_patients", "view_reports", "manage_users", "perform_treatments"]


def _normalize_role(v):
    if isinstance(v, str):
        return v.strip().upper()
    return v


class UserCreate(BaseModel):
    """Schéma pour créer un utilisateur."""
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.ASSISTANT
    google_id: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return _normalize_role(v)


class UserProfileUpdate(BaseModel):
    """Schéma pour modifier son profil."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UserRoleUpdate(BaseModel):
    """Schéma pour changer le rôle d'un utilisateur."""
    role: UserRole

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return _normalize_role(v)


class UserResponse(BaseModel):
    """Schéma de réponse pour un utilisateur."""
    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    role_display_name: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    permissions: List[str] = []

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserList(PageMeta):
    """Liste paginée d'utilisateurs."""
    items: List[UserResponse]
