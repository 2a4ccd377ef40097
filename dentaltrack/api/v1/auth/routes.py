"""
Routes FastAPI d'authentification.

L'émission des tokens est externe (fournisseur OAuth ou
scripts/create_token.py) : ce module expose le profil courant.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user
from dentaltrack.database.session import get_db
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.user.routes import build_user_response
from dentaltrack.api.v1.user.schemas import UserResponse, UserProfileUpdate
from dentaltrack.api.v1.user.services import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Retourne l'utilisateur authentifié et ses permissions."""
    return build_user_response(current_user)


@router.put("/me", response_model=UserResponse)
def update_current_user(
        data: UserProfileUpdate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Met à jour le prénom et le nom de l'utilisateur authentifié."""
    return build_user_response(UserService(db).update_profile(current_user, data))
