"""
Patients - Dossier patient du cabinet.

Identité, coordonnées, contact d'urgence et informations médicales.
La suppression d'un patient est logique (désactivation).
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Text, Date, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dentaltrack.database.base_class import Base
from dentaltrack.models.enums import TreatmentStatus
from dentaltrack.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

if TYPE_CHECKING:
    from dentaltrack.models.treatment.treatment import Treatment


class Patient(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Dossier patient.

    Attributes:
        first_name / last_name: Identité (obligatoires)
        email: Email unique
        phone: Téléphone (format international)
        date_of_birth: Date de naissance
        gender: Genre (texte libre court)
        address: Adresse postale
        emergency_contact / emergency_phone: Personne à prévenir
        medical_history: Antécédents médicaux
        allergies: Allergies connues
        is_active: False après suppression logique

    Example:
        >>> patient = Patient(
        ...     first_name="Alice",
        ...     last_name="Johnson",
        ...     email="alice.johnson@email.com",
        ...     date_of_birth=date(1985, 3, 15),
        ... )
    """

    __tablename__ = "patients"
    __table_args__ = (
        Index("ix_patients_name", "first_name", "last_name"),
        {"comment": "Dossiers patients"},
    )

    # === Identité ===
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Prénom"
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Nom de famille"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Email unique"
    )

    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date de naissance"
    )

    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)

    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # === Contact d'urgence ===
    emergency_contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emergency_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # === Informations médicales ===
    medical_history: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Antécédents médicaux (2000 caractères max)"
    )

    allergies: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Allergies connues (1000 caractères max)"
    )

    # === Statut ===
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="False après suppression logique"
    )

    # === Relations ===
    treatments: Mapped[List["Treatment"]] = relationship(
        "Treatment",
        back_populates="patient",
        cascade="all, delete-orphan",
        order_by="Treatment.start_date",
    )

    # === Méthodes ===
    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"<Patient(id={self.id}, name='{self.full_name}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> int:
        """Âge en années révolues à la date du jour."""
        today = date.today()
        age = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            age -= 1
        return age

    @property
    def has_active_treatment(self) -> bool:
        """Indique si un traitement est en cours."""
        return any(t.status == TreatmentStatus.IN_PROGRESS for t in self.treatments)

    def update_personal_info(
            self,
            first_name: str,
            last_name: str,
            email: str,
            date_of_birth: date,
            phone: Optional[str] = None,
            gender: Optional[str] = None,
            address: Optional[str] = None,
            emergency_contact: Optional[str] = None,
            emergency_phone: Optional[str] = None,
    ) -> None:
        """Met à jour l'identité et les coordonnées."""
        if not first_name or not first_name.strip():
            raise ValueError("Le prénom est obligatoire")
        if not last_name or not last_name.strip():
            raise ValueError("Le nom est obligatoire")
        if date_of_birth >= date.today():
            raise ValueError("La date de naissance doit être dans le passé")

        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.email = email.strip().lower()
        self.date_of_birth = date_of_birth
        self.phone = phone
        self.gender = gender
        self.address = address
        self.emergency_contact = emergency_contact
        self.emergency_phone = emergency_phone

    def update_medical_info(self, medical_history: Optional[str], allergies: Optional[str]) -> None:
        self.medical_history = medical_history
        self.allergies = allergies

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
