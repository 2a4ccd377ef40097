"""
Schémas Pydantic pour le module Analysis.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, ConfigDict

from dentaltrack.api.v1.dependencies import PageMeta
from dentaltrack.models.enums import AnalysisType, AnalysisStatus


class AnalysisCreate(BaseModel):
    """Schéma pour demander une analyse d'un cliché."""
    type: AnalysisType

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper().replace(" ", "_")
        return v


class AnalysisComplete(BaseModel):
    """Résultats d'une analyse terminée."""
    results: str = Field(..., min_length=1, max_length=5000)
    confidence_score: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    findings: Optional[str] = Field(None, max_length=2000)
    recommendations: Optional[str] = Field(None, max_length=2000)
    processing_time_ms: Optional[int] = Field(None, ge=0)


class AnalysisFail(BaseModel):
    """Cause d'échec d'une analyse."""
    error_message: str = Field(..., min_length=1, max_length=1000)
    processing_time_ms: Optional[int] = Field(None, ge=0)


class AnalysisResponse(BaseModel):
    """Schéma de réponse pour une analyse."""
    id: UUID
    photo_id: UUID
    type: AnalysisType
    type_display_name: str
    type_description: str
    status: AnalysisStatus
    status_display_name: str
    results: Optional[str] = None
    confidence_score: Optional[Decimal] = None
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    processing_time_ms: Optional[int] = None

    # Propriétés calculées
    is_ai_based: bool
    has_high_confidence: bool

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AnalysisList(PageMeta):
    """Liste paginée d'analyses."""
    items: List[AnalysisResponse]


class AnalysisFilters(BaseModel):
    """Filtres pour la liste des analyses."""
    photo_id: Optional[UUID] = None
    type: Optional[AnalysisType] = None
    status: Optional[AnalysisStatus] = None
    min_confidence: Optional[Decimal] = None
