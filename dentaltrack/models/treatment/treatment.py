"""
Traitements - Actes dentaires d'un patient.

Cycle de vie :
    PLANNED ──start()──▶ IN_PROGRESS ──complete()──▶ COMPLETED
       │                      │
       └───────cancel()───────┴──▶ CANCELLED   (impossible depuis COMPLETED)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Text, ForeignKey, Numeric, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dentaltrack.database.base_class import Base
from dentaltrack.models.enums import TreatmentStatus, TreatmentType
from dentaltrack.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from dentaltrack.models.types import UTCDateTime, utcnow

if TYPE_CHECKING:
    from dentaltrack.models.patient.patient import Patient
    from dentaltrack.models.treatment.photo import Photo


class Treatment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Traitement dentaire.

    Attributes:
        patient_id: Patient concerné
        type: Type d'acte (TreatmentType)
        title: Intitulé
        description: Description détaillée
        status: Statut (PLANNED, IN_PROGRESS, COMPLETED, CANCELLED, ON_HOLD)
        start_date: Début (planifié puis effectif)
        end_date: Fin effective
        estimated_cost / actual_cost: Coûts
        notes: Notes de fin de traitement ou motif d'annulation
    """

    __tablename__ = "treatments"
    __table_args__ = (
        {"comment": "Traitements dentaires"}
    )

    # === Références ===
    patient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Patient concerné"
    )

    # === Description ===
    type: Mapped[TreatmentType] = mapped_column(
        SQLEnum(TreatmentType, name="treatment_type_enum", create_constraint=True),
        nullable=False,
        comment="Type d'acte"
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # === Statut ===
    status: Mapped[TreatmentStatus] = mapped_column(
        SQLEnum(TreatmentStatus, name="treatment_status_enum", create_constraint=True),
        nullable=False,
        default=TreatmentStatus.PLANNED,
        index=True,
        comment="Statut du traitement"
    )

    # === Période ===
    start_date: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        index=True,
        comment="Date de début"
    )

    end_date: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="Date de fin effective"
    )

    # === Coûts ===
    estimated_cost: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Coût estimé"
    )

    actual_cost: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Coût réel"
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # === Relations ===
    patient: Mapped["Patient"] = relationship(
        "Patient",
        back_populates="treatments"
    )

    photos: Mapped[List["Photo"]] = relationship(
        "Photo",
        back_populates="treatment",
        cascade="all, delete-orphan",
        order_by="Photo.created_at",
    )

    # === Méthodes ===
    def __str__(self) -> str:
        return f"{self.title} ({self.status.value})"

    def __repr__(self) -> str:
        return f"<Treatment(id={self.id}, patient_id={self.patient_id}, status='{self.status.value}')>"

    @property
    def is_active(self) -> bool:
        """Indique si le traitement est en cours."""
        return self.status == TreatmentStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == TreatmentStatus.COMPLETED

    @property
    def is_deletable(self) -> bool:
        """Seuls les traitements planifiés ou annulés peuvent être supprimés."""
        return self.status in (TreatmentStatus.PLANNED, TreatmentStatus.CANCELLED)

    @property
    def duration(self) -> Optional[timedelta]:
        """Durée écoulée : fin - début, ou maintenant - début si en cours."""
        if self.end_date is not None:
            return self.end_date - self.start_date
        if self.status == TreatmentStatus.IN_PROGRESS:
            return utcnow() - self.start_date
        return None

    def start(self) -> None:
        """Démarre le traitement (PLANNED → IN_PROGRESS)."""
        if self.status != TreatmentStatus.PLANNED:
            raise ValueError(
                f"Seul un traitement planifié peut être démarré (statut actuel : {self.status.value})"
            )
        self.status = TreatmentStatus.IN_PROGRESS
        self.start_date = utcnow()

    def complete(self, actual_cost: Optional[Decimal] = None, notes: Optional[str] = None) -> None:
        """Termine le traitement (IN_PROGRESS → COMPLETED)."""
        if self.status != TreatmentStatus.IN_PROGRESS:
            raise ValueError(
                f"Seul un traitement en cours peut être terminé (statut actuel : {self.status.value})"
            )
        self.status = TreatmentStatus.COMPLETED
        self.end_date = utcnow()
        self.actual_cost = actual_cost
        self.notes = notes

    def cancel(self, reason: Optional[str] = None) -> None:
        """Annule le traitement (tout statut sauf COMPLETED)."""
        if self.status == TreatmentStatus.COMPLETED:
            raise ValueError("Un traitement terminé ne peut pas être annulé")
        self.status = TreatmentStatus.CANCELLED
        self.notes = reason

    def update_details(
            self,
            title: str,
            description: Optional[str] = None,
            estimated_cost: Optional[Decimal] = None,
    ) -> None:
        if not title or not title.strip():
            raise ValueError("Le titre est obligatoire")
        self.title = title.strip()
        self.description = description
        self.estimated_cost = estimated_cost
