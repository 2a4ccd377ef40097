"""
Services métier pour le module User.

Gestion des comptes par un administrateur : création, rôle,
activation / désactivation.
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dentaltrack.core.exceptions import NotFoundError, ConflictError, InvalidOperationError
from dentaltrack.models.enums import UserRole
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.user.schemas import UserCreate, UserProfileUpdate

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class UserNotFoundError(NotFoundError):
    """Utilisateur non trouvé."""
    pass


class DuplicateUserEmailError(ConflictError):
    """Email déjà utilisé."""
    pass


class DuplicateGoogleIdError(ConflictError):
    """Identifiant Google déjà associé à un autre compte."""
    pass


class SelfDeactivationError(InvalidOperationError):
    """Un administrateur ne peut pas se désactiver lui-même."""
    pass


# =============================================================================
# USER SERVICE
# =============================================================================

class UserService:
    """Service pour la gestion des utilisateurs."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
            self,
            page: int = 1,
            size: int = 10,
            role: Optional[UserRole] = None,
            is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        query = select(User)

        if role:
            query = query.where(User.role == role)
        if is_active is not None:
            query = query.where(User.is_active.is_(is_active))

        total = self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = query.order_by(User.last_name, User.first_name)
        query = query.offset((page - 1) * size).limit(size)
        return list(self.db.scalars(query).all()), total

    def get_by_id(self, user_id: UUID) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(f"Utilisateur {user_id} non trouvé")
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(func.lower(User.email) == email.lower()))

    def get_by_google_id(self, google_id: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.google_id == google_id))

    def create(self, data: UserCreate) -> User:
        if self.get_by_email(data.email):
            raise DuplicateUserEmailError(f"Un utilisateur avec l'email {data.email} existe déjà")
        if data.google_id and self.get_by_google_id(data.google_id):
            raise DuplicateGoogleIdError(
                f"Un utilisateur avec l'identifiant Google {data.google_id} existe déjà"
            )

        user = User(**data.model_dump())
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info("Utilisateur créé : %s (%s)", user.email, user.role.value)
        return user

    def update_profile(self, user: User, data: UserProfileUpdate) -> User:
        try:
            user.update_profile(data.first_name, data.last_name)
        except ValueError as e:
            raise InvalidOperationError(str(e))
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_role(self, user_id: UUID, role: UserRole) -> User:
        user = self.get_by_id(user_id)
        user.update_role(role)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Rôle de %s changé en %s", user.email, role.value)
        return user

    def activate(self, user_id: UUID) -> User:
        user = self.get_by_id(user_id)
        user.activate()
        self.db.commit()
        self.db.refresh(user)
        return user

    def deactivate(self, user_id: UUID, current_user: User) -> User:
        if user_id == current_user.id:
            raise SelfDeactivationError("Vous ne pouvez pas désactiver votre propre compte")
        user = self.get_by_id(user_id)
        user.deactivate()
        self.db.commit()
        self.db.refresh(user)
        logger.info("Utilisateur désactivé : %s", user.email)
        return user
