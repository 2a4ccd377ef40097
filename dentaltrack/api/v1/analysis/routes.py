"""
Routes FastAPI pour le module Analysis.

Endpoints pour :
- /analyses : Liste et détail
- /analyses/{id}/start|complete|fail|retry|cancel : Cycle de vie
- /photos/{id}/analyses : Demande et liste par cliché
"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user
from dentaltrack.database.session import get_db
from dentaltrack.models.enums import AnalysisType, AnalysisStatus
from dentaltrack.models.treatment.analysis import Analysis
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dependencies import PaginationParams, page_meta
from dentaltrack.api.v1.analysis.schemas import (
    AnalysisCreate, AnalysisComplete, AnalysisFail,
    AnalysisResponse, AnalysisList, AnalysisFilters,
)
from dentaltrack.api.v1.analysis.services import AnalysisService

# =============================================================================
# ROUTERS
# =============================================================================

router = APIRouter(tags=["Analyses"])
analyses_router = APIRouter(prefix="/analyses", tags=["Analyses"])
photo_analyses_router = APIRouter(prefix="/photos/{photo_id}/analyses", tags=["Analyses"])


def _build_analysis_response(analysis: Analysis) -> AnalysisResponse:
    """Construit la réponse pour une analyse."""
    return AnalysisResponse(
        id=analysis.id,
        photo_id=analysis.photo_id,
        type=analysis.type,
        type_display_name=analysis.type.display_name,
        type_description=analysis.type.description,
        status=analysis.status,
        status_display_name=analysis.status.display_name,
        results=analysis.results,
        confidence_score=analysis.confidence_score,
        findings=analysis.findings,
        recommendations=analysis.recommendations,
        completed_at=analysis.completed_at,
        error_message=analysis.error_message,
        processing_time_ms=analysis.processing_time_ms,
        is_ai_based=analysis.type.is_ai_based,
        has_high_confidence=analysis.has_high_confidence,
        created_at=analysis.created_at,
        updated_at=analysis.updated_at,
    )


# =============================================================================
# ANALYSIS ENDPOINTS
# =============================================================================

@analyses_router.get("", response_model=AnalysisList)
def list_analyses(
        pagination: PaginationParams = Depends(),
        photo_id: Optional[UUID] = Query(None, description="Filtrer par cliché"),
        type: Optional[AnalysisType] = Query(None, description="Filtrer par type"),
        status: Optional[AnalysisStatus] = Query(None, description="Filtrer par statut"),
        min_confidence: Optional[Decimal] = Query(None, ge=0, le=1, description="Confiance minimale"),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les analyses avec filtres."""
    filters = AnalysisFilters(
        photo_id=photo_id, type=type, status=status, min_confidence=min_confidence,
    )
    items, total = AnalysisService(db).get_all(
        page=pagination.page,
        size=pagination.size,
        filters=filters,
    )
    return AnalysisList(
        items=[_build_analysis_response(a) for a in items],
        **page_meta(total, pagination),
    )


@analyses_router.get("/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(
        analysis_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Récupère une analyse."""
    return _build_analysis_response(AnalysisService(db).get_by_id(analysis_id))


@analyses_router.post("/{analysis_id}/start", response_model=AnalysisResponse)
def start_analysis(
        analysis_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Passe une analyse en cours de traitement."""
    return _build_analysis_response(AnalysisService(db).start(analysis_id))


@analyses_router.post("/{analysis_id}/complete", response_model=AnalysisResponse)
def complete_analysis(
        analysis_id: UUID,
        data: AnalysisComplete,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Enregistre les résultats d'une analyse."""
    return _build_analysis_response(AnalysisService(db).complete(analysis_id, data))


@analyses_router.post("/{analysis_id}/fail", response_model=AnalysisResponse)
def fail_analysis(
        analysis_id: UUID,
        data: AnalysisFail,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Marque une analyse en échec."""
    return _build_analysis_response(AnalysisService(db).fail(analysis_id, data))


@analyses_router.post("/{analysis_id}/retry", response_model=AnalysisResponse)
def retry_analysis(
        analysis_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Remet en attente une analyse échouée."""
    return _build_analysis_response(AnalysisService(db).retry(analysis_id))


@analyses_router.post("/{analysis_id}/cancel", response_model=AnalysisResponse)
def cancel_analysis(
        analysis_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Annule une analyse en attente ou en cours."""
    return _build_analysis_response(AnalysisService(db).cancel(analysis_id))


# =============================================================================
# PHOTO ANALYSES
# =============================================================================

@photo_analyses_router.post("", response_model=AnalysisResponse, status_code=status.HTTP_201_CREATED)
def create_photo_analysis(
        photo_id: UUID,
        data: AnalysisCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Demande une analyse d'un cliché."""
    return _build_analysis_response(AnalysisService(db).create(photo_id, data))


@photo_analyses_router.get("", response_model=List[AnalysisResponse])
def list_photo_analyses(
        photo_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les analyses d'un cliché."""
    return [_build_analysis_response(a) for a in AnalysisService(db).get_by_photo(photo_id)]


router.include_router(analyses_router)
router.include_router(photo_analyses_router)
