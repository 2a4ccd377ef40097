"""
Services métier pour le module Analysis.

Contient :
- AnalysisService : création, consultation et cycle de vie des analyses
  (start → complete / fail → retry, cancel)
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dentaltrack.core.exceptions import NotFoundError, InvalidOperationError
from dentaltrack.models.enums import AnalysisStatus
from dentaltrack.models.treatment.analysis import Analysis
from dentaltrack.models.treatment.photo import Photo

from dentaltrack.api.v1.photo.services import PhotoNotFoundError
from dentaltrack.api.v1.analysis.schemas import (
    AnalysisCreate, AnalysisComplete, AnalysisFail, AnalysisFilters,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class AnalysisNotFoundError(NotFoundError):
    """Analyse non trouvée."""
    pass


class AnalysisStatusError(InvalidOperationError):
    """Transition de statut invalide."""
    pass


# =============================================================================
# ANALYSIS SERVICE
# =============================================================================

class AnalysisService:
    """Service pour la gestion des analyses."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return select(Analysis)

    def get_all(
            self,
            page: int = 1,
            size: int = 10,
            filters: Optional[AnalysisFilters] = None,
    ) -> Tuple[List[Analysis], int]:
        query = self._base_query()

        if filters:
            if filters.photo_id:
                query = query.where(Analysis.photo_id == filters.photo_id)
            if filters.type:
                query = query.where(Analysis.type == filters.type)
            if filters.status:
                query = query.where(Analysis.status == filters.status)
            if filters.min_confidence is not None:
                query = query.where(Analysis.confidence_score >= filters.min_confidence)

        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.scalar(count_query)

        query = query.order_by(Analysis.created_at.desc(), Analysis.id)
        query = query.offset((page - 1) * size).limit(size)
        items = list(self.db.scalars(query).all())

        return items, total

    def get_by_id(self, analysis_id: UUID) -> Analysis:
        analysis = self.db.get(Analysis, analysis_id)
        if not analysis:
            raise AnalysisNotFoundError(f"Analyse {analysis_id} non trouvée")
        return analysis

    def get_by_photo(self, photo_id: UUID) -> List[Analysis]:
        if not self.db.get(Photo, photo_id):
            raise PhotoNotFoundError(f"Photo {photo_id} non trouvée")
        query = (
            self._base_query()
            .where(Analysis.photo_id == photo_id)
            .order_by(Analysis.created_at.desc())
        )
        return list(self.db.scalars(query).all())

    def create(self, photo_id: UUID, data: AnalysisCreate) -> Analysis:
        if not self.db.get(Photo, photo_id):
            raise PhotoNotFoundError(f"Photo {photo_id} non trouvée")

        analysis = Analysis(photo_id=photo_id, type=data.type, status=AnalysisStatus.PENDING)
        self.db.add(analysis)
        self.db.commit()
        self.db.refresh(analysis)

        logger.info("Analyse %s demandée pour la photo %s", data.type.value, photo_id)
        return analysis

    # =========================================================================
    # WORKFLOW
    # =========================================================================

    def _transition(self, analysis_id: UUID, action: str, *args, **kwargs) -> Analysis:
        """Applique une méthode de transition du modèle et persiste."""
        analysis = self.get_by_id(analysis_id)
        try:
            getattr(analysis, action)(*args, **kwargs)
        except ValueError as e:
            raise AnalysisStatusError(str(e))

        self.db.commit()
        self.db.refresh(analysis)
        logger.info("Analyse %s : %s → %s", analysis_id, action, analysis.status.value)
        return analysis

    def start(self, analysis_id: UUID) -> Analysis:
        return self._transition(analysis_id, "start_processing")

    def complete(self, analysis_id: UUID, data: AnalysisComplete) -> Analysis:
        return self._transition(
            analysis_id,
            "complete",
            results=data.results,
            confidence_score=data.confidence_score,
            findings=data.findings,
            recommendations=data.recommendations,
            processing_time_ms=data.processing_time_ms,
        )

    def fail(self, analysis_id: UUID, data: AnalysisFail) -> Analysis:
        return self._transition(
            analysis_id,
            "fail",
            error_message=data.error_message,
            processing_time_ms=data.processing_time_ms,
        )

    def retry(self, analysis_id: UUID) -> Analysis:
        return self._transition(analysis_id, "retry")

    def cancel(self, analysis_id: UUID) -> Analysis:
        return self._transition(analysis_id, "cancel")

    # =========================================================================
    # STATISTIQUES
    # =========================================================================

    def get_average_processing_time(self) -> Optional[float]:
        """Durée moyenne (ms) des analyses terminées avec succès."""
        value = self.db.scalar(
            select(func.avg(Analysis.processing_time_ms)).where(
                Analysis.status == AnalysisStatus.COMPLETED,
                Analysis.processing_time_ms.is_not(None),
            )
        )
        return float(value) if value is not None else None
