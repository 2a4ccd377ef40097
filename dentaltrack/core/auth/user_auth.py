"""
Dépendances d'authentification des utilisateurs.

Flow:
    1. get_current_user() extrait le JWT du header Authorization
    2. Vérifie la signature et charge l'utilisateur en base
    3. require_permission() vérifie une capacité du rôle

Usage:
    @router.delete("/patients/{patient_id}")
    def delete_patient(
        current_user: User = Depends(require_permission("manage_patients")),
        db: Session = Depends(get_db),
    ):
        ...
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from dentaltrack.core.security.jwt import verify_token
from dentaltrack.database.session import get_db
from dentaltrack.models.user.user import User

logger = logging.getLogger(__name__)

# Security scheme pour le token Bearer
bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# AUTHENTIFICATION UTILISATEUR
# =============================================================================

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Dépendance pour obtenir l'utilisateur courant depuis le JWT.

    Raises:
        HTTPException 401: Token manquant ou invalide, utilisateur inconnu
        HTTPException 403: Utilisateur inactif
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token d'authentification requis",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_token(credentials.credentials, token_type="access")
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token invalide: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Le JWT stocke l'UUID sous forme de chaîne
    try:
        user_id = uuid.UUID(payload.get("sub") or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token invalide: identifiant utilisateur manquant",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.get(User, user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Utilisateur non trouvé",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Compte utilisateur désactivé",
        )

    return user


# =============================================================================
# VÉRIFICATION DES PERMISSIONS UTILISATEUR
# =============================================================================

def require_permission(permission: str):
    """
    Factory de dépendance pour vérifier une capacité du rôle.

    Permissions : manage_patients, view_reports, manage_users, perform_treatments.
    """
    async def permission_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if not current_user.has_permission(permission):
            logger.info(
                "Permission %s refusée pour %s (%s)",
                permission, current_user.email, current_user.role.value,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission requise: {permission}",
            )
        return current_user

    return permission_checker
