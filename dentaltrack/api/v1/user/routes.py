"""
Routes FastAPI pour le module User (administration des comptes).

Toutes les routes exigent la permission manage_users (rôle ADMIN).
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import require_permission
from dentaltrack.database.session import get_db
from dentaltrack.models.enums import UserRole
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dependencies import PaginationParams, page_meta
from dentaltrack.api.v1.user.schemas import (
    UserCreate, UserRoleUpdate, UserResponse, UserList, USER_PERMISSIONS,
)
from dentaltrack.api.v1.user.services import UserService

router = APIRouter(tags=["Users"])
users_router = APIRouter(prefix="/users", tags=["Users"])


def build_user_response(user: User) -> UserResponse:
    """Construit la réponse pour un utilisateur (partagé avec /auth/me)."""
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        role=user.role,
        role_display_name=user.role.display_name,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
        permissions=[p for p in USER_PERMISSIONS if user.has_permission(p)],
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@users_router.get("", response_model=UserList)
def list_users(
        pagination: PaginationParams = Depends(),
        role: Optional[UserRole] = Query(None, description="Filtrer par rôle"),
        is_active: Optional[bool] = Query(None),
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    """Liste les utilisateurs."""
    items, total = UserService(db).get_all(
        page=pagination.page, size=pagination.size, role=role, is_active=is_active,
    )
    return UserList(items=[build_user_response(u) for u in items], **page_meta(total, pagination))


@users_router.get("/{user_id}", response_model=UserResponse)
def get_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    return build_user_response(UserService(db).get_by_id(user_id))


@users_router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
        data: UserCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    """Crée un compte utilisateur."""
    return build_user_response(UserService(db).create(data))


@users_router.patch("/{user_id}/role", response_model=UserResponse)
def update_user_role(
        user_id: UUID,
        data: UserRoleUpdate,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    """Change le rôle d'un utilisateur."""
    return build_user_response(UserService(db).update_role(user_id, data.role))


@users_router.post("/{user_id}/activate", response_model=UserResponse)
def activate_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    return build_user_response(UserService(db).activate(user_id))


@users_router.post("/{user_id}/deactivate", response_model=UserResponse)
def deactivate_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_users")),
):
    """Désactive un compte (sauf le sien)."""
    return build_user_response(UserService(db).deactivate(user_id, current_user))


router.include_router(users_router)
