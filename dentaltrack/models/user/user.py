"""
Utilisateurs du cabinet (praticiens, assistants, administrateurs).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Boolean, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from dentaltrack.database.base_class import Base
from dentaltrack.models.enums import UserRole
from dentaltrack.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from dentaltrack.models.types import UTCDateTime, utcnow


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Utilisateur authentifié de l'application.

    Attributes:
        email: Email unique (identifiant de connexion)
        google_id: Identifiant du fournisseur OAuth (optionnel)
        first_name / last_name: Identité
        role: DOCTOR, ASSISTANT ou ADMIN
        is_active: Compte actif
        last_login_at: Dernière connexion
    """

    __tablename__ = "users"
    __table_args__ = (
        {"comment": "Utilisateurs du cabinet"}
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Email unique"
    )

    google_id: Mapped[str | None] = mapped_column(
        String(100),
        unique=True,
        nullable=True,
        comment="Identifiant Google OAuth"
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role_enum", create_constraint=True),
        nullable=False,
        default=UserRole.ASSISTANT,
        comment="Rôle applicatif"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Compte actif"
    )

    last_login_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="Date de dernière connexion"
    )

    # === Méthodes ===
    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def has_permission(self, permission: str) -> bool:
        """
        Vérifie une capacité du rôle.

        Permissions reconnues : manage_patients, view_reports,
        manage_users, perform_treatments.
        """
        return bool(getattr(self.role, f"can_{permission}", False))

    def update_profile(self, first_name: str, last_name: str) -> None:
        if not first_name or not first_name.strip():
            raise ValueError("Le prénom est obligatoire")
        if not last_name or not last_name.strip():
            raise ValueError("Le nom est obligatoire")
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()

    def update_role(self, role: UserRole) -> None:
        self.role = role

    def record_login(self) -> None:
        self.last_login_at = utcnow()

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
