"""
Schémas Pydantic pour le tableau de bord.
"""
from typing import Dict, Optional

from pydantic import BaseModel


class PatientStats(BaseModel):
    total: int
    active: int


class TreatmentStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    active: int
    upcoming: int
    completed_this_month: int


class PhotoStats(BaseModel):
    total: int
    total_size_bytes: int
    requiring_review: int
    unprocessed: int


class AnalysisStats(BaseModel):
    total: int
    pending: int
    failed: int
    high_confidence: int
    average_processing_time_ms: Optional[float] = None


class DashboardStats(BaseModel):
    """Indicateurs agrégés du cabinet."""
    patients: PatientStats
    treatments: TreatmentStats
    photos: PhotoStats
    analyses: AnalysisStats
