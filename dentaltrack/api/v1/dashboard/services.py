"""
Service de statistiques pour le tableau de bord.
"""
from datetime import timedelta

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dentaltrack.models.enums import TreatmentStatus, AnalysisStatus, PhotoQuality
from dentaltrack.models.patient.patient import Patient
from dentaltrack.models.treatment.analysis import Analysis, HIGH_CONFIDENCE_THRESHOLD
from dentaltrack.models.treatment.photo import Photo
from dentaltrack.models.treatment.treatment import Treatment
from dentaltrack.models.types import utcnow

from dentaltrack.api.v1.analysis.services import AnalysisService
from dentaltrack.api.v1.photo.services import PhotoService
from dentaltrack.api.v1.dashboard.schemas import (
    DashboardStats, PatientStats, TreatmentStats, PhotoStats, AnalysisStats,
)

UPCOMING_WINDOW_DAYS = 7


class DashboardService:
    """Agrège les compteurs affichés sur la page d'accueil."""

    def __init__(self, db: Session):
        self.db = db

    def _count(self, model, *criteria) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        return self.db.scalar(query) or 0

    def get_stats(self) -> DashboardStats:
        now = utcnow()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        by_status = {s.value: 0 for s in TreatmentStatus}
        rows = self.db.execute(
            select(Treatment.status, func.count()).group_by(Treatment.status)
        ).all()
        for status, count in rows:
            by_status[status.value] = count

        return DashboardStats(
            patients=PatientStats(
                total=self._count(Patient),
                active=self._count(Patient, Patient.is_active.is_(True)),
            ),
            treatments=TreatmentStats(
                total=sum(by_status.values()),
                by_status=by_status,
                active=by_status[TreatmentStatus.IN_PROGRESS.value],
                upcoming=self._count(
                    Treatment,
                    Treatment.status == TreatmentStatus.PLANNED,
                    Treatment.start_date >= now,
                    Treatment.start_date <= now + timedelta(days=UPCOMING_WINDOW_DAYS),
                ),
                completed_this_month=self._count(
                    Treatment,
                    Treatment.status == TreatmentStatus.COMPLETED,
                    Treatment.end_date >= month_start,
                ),
            ),
            photos=PhotoStats(
                total=self._count(Photo),
                total_size_bytes=PhotoService(self.db).get_total_file_size(),
                requiring_review=self._count(
                    Photo, Photo.quality.in_((PhotoQuality.PENDING, PhotoQuality.LOW))
                ),
                unprocessed=self._count(Photo, Photo.is_processed.is_(False)),
            ),
            analyses=AnalysisStats(
                total=self._count(Analysis),
                pending=self._count(Analysis, Analysis.status == AnalysisStatus.PENDING),
                failed=self._count(Analysis, Analysis.status == AnalysisStatus.FAILED),
                high_confidence=self._count(
                    Analysis, Analysis.confidence_score >= HIGH_CONFIDENCE_THRESHOLD
                ),
                average_processing_time_ms=AnalysisService(self.db).get_average_processing_time(),
            ),
        )
