"""
Analyses - Résultats d'analyse (IA ou manuelle) d'un cliché.

Cycle de vie :
    PENDING ──start_processing()──▶ PROCESSING ──complete()──▶ COMPLETED
       ▲                               │
       └────────retry()──── FAILED ◀───┘ fail()

    cancel() : depuis PENDING ou PROCESSING → CANCELLED
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text, String, Integer, ForeignKey, Numeric, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dentaltrack.database.base_class import Base
from dentaltrack.models.enums import AnalysisStatus, AnalysisType
from dentaltrack.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from dentaltrack.models.types import UTCDateTime, utcnow

if TYPE_CHECKING:
    from dentaltrack.models.treatment.photo import Photo


HIGH_CONFIDENCE_THRESHOLD = Decimal("0.8")


class Analysis(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Analyse d'un cliché.

    Attributes:
        photo_id: Cliché analysé
        type: Type d'analyse (AnalysisType)
        status: PENDING, PROCESSING, COMPLETED, FAILED, CANCELLED
        results: Résultats bruts (texte / JSON sérialisé)
        confidence_score: Score de confiance entre 0 et 1
        findings / recommendations: Conclusions
        completed_at: Fin du traitement (succès ou échec)
        error_message: Cause de l'échec
        processing_time_ms: Durée du traitement
    """

    __tablename__ = "analyses"
    __table_args__ = (
        {"comment": "Analyses de clichés"}
    )

    photo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("photos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Cliché analysé"
    )

    type: Mapped[AnalysisType] = mapped_column(
        SQLEnum(AnalysisType, name="analysis_type_enum", create_constraint=True),
        nullable=False,
    )

    status: Mapped[AnalysisStatus] = mapped_column(
        SQLEnum(AnalysisStatus, name="analysis_status_enum", create_constraint=True),
        nullable=False,
        default=AnalysisStatus.PENDING,
        index=True,
    )

    # === Résultats ===
    results: Mapped[str | None] = mapped_column(Text, nullable=True)

    confidence_score: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 4),
        nullable=True,
        comment="Score de confiance (0-1)"
    )

    findings: Mapped[str | None] = mapped_column(Text, nullable=True)
    recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)

    completed_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    error_message: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    processing_time_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # === Relations ===
    photo: Mapped["Photo"] = relationship(
        "Photo",
        back_populates="analyses"
    )

    # === Méthodes ===
    def __repr__(self) -> str:
        return f"<Analysis(id={self.id}, type='{self.type.value}', status='{self.status.value}')>"

    @property
    def is_completed(self) -> bool:
        return self.status == AnalysisStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status == AnalysisStatus.FAILED

    @property
    def is_processing(self) -> bool:
        return self.status == AnalysisStatus.PROCESSING

    @property
    def has_high_confidence(self) -> bool:
        return self.confidence_score is not None and self.confidence_score >= HIGH_CONFIDENCE_THRESHOLD

    def start_processing(self) -> None:
        if self.status != AnalysisStatus.PENDING:
            raise ValueError(
                f"Seule une analyse en attente peut être lancée (statut actuel : {self.status.value})"
            )
        self.status = AnalysisStatus.PROCESSING

    def complete(
            self,
            results: str,
            confidence_score: Optional[Decimal] = None,
            findings: Optional[str] = None,
            recommendations: Optional[str] = None,
            processing_time_ms: Optional[int] = None,
    ) -> None:
        if self.status != AnalysisStatus.PROCESSING:
            raise ValueError(
                f"Seule une analyse en cours peut être terminée (statut actuel : {self.status.value})"
            )
        if not results or not results.strip():
            raise ValueError("Les résultats sont obligatoires")
        if confidence_score is not None and not (0 <= confidence_score <= 1):
            raise ValueError("Le score de confiance doit être compris entre 0 et 1")
        if processing_time_ms is not None and processing_time_ms < 0:
            raise ValueError("La durée de traitement ne peut pas être négative")

        self.status = AnalysisStatus.COMPLETED
        self.results = results
        self.confidence_score = Decimal(str(confidence_score)) if confidence_score is not None else None
        self.findings = findings
        self.recommendations = recommendations
        self.processing_time_ms = processing_time_ms
        self.completed_at = utcnow()
        self.error_message = None

    def fail(self, error_message: str, processing_time_ms: Optional[int] = None) -> None:
        if self.status != AnalysisStatus.PROCESSING:
            raise ValueError(
                f"Seule une analyse en cours peut échouer (statut actuel : {self.status.value})"
            )
        if not error_message or not error_message.strip():
            raise ValueError("Le message d'erreur est obligatoire")

        self.status = AnalysisStatus.FAILED
        self.error_message = error_message
        self.processing_time_ms = processing_time_ms
        self.completed_at = utcnow()

    def retry(self) -> None:
        """Remet une analyse échouée en attente et efface ses résultats."""
        if self.status != AnalysisStatus.FAILED:
            raise ValueError("Seule une analyse échouée peut être relancée")

        self.status = AnalysisStatus.PENDING
        self.results = None
        self.confidence_score = None
        self.findings = None
        self.recommendations = None
        self.completed_at = None
        self.error_message = None
        self.processing_time_ms = None

    def cancel(self) -> None:
        if self.status not in (AnalysisStatus.PENDING, AnalysisStatus.PROCESSING):
            raise ValueError(
                f"Impossible d'annuler une analyse terminée (statut actuel : {self.status.value})"
            )
        self.status = AnalysisStatus.CANCELLED
