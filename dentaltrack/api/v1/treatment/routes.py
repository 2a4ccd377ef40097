"""
Routes FastAPI pour le module Treatment.

Endpoints pour :
- /treatments : CRUD des traitements
- /treatments/{id}/start|complete|cancel : Transitions de statut
- /patients/{id}/treatments : Traitements d'un patient
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user, require_permission
from dentaltrack.database.session import get_db
from dentaltrack.models.treatment.treatment import Treatment
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dependencies import PaginationParams, page_meta
from dentaltrack.api.v1.treatment.schemas import (
    TreatmentCreate, TreatmentUpdate, TreatmentComplete, TreatmentCancel,
    TreatmentResponse, TreatmentList, TreatmentFilters,
)
from dentaltrack.api.v1.treatment.services import TreatmentService

# =============================================================================
# ROUTERS
# =============================================================================

router = APIRouter(tags=["Treatments"])
treatments_router = APIRouter(prefix="/treatments", tags=["Treatments"])
patient_treatments_router = APIRouter(prefix="/patients/{patient_id}/treatments", tags=["Treatments"])


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _build_treatment_response(treatment: Treatment) -> TreatmentResponse:
    """Construit la réponse pour un traitement."""
    return TreatmentResponse(
        id=treatment.id,
        patient_id=treatment.patient_id,
        patient_name=treatment.patient.full_name if treatment.patient else None,
        type=treatment.type,
        type_display_name=treatment.type.display_name,
        title=treatment.title,
        description=treatment.description,
        status=treatment.status,
        status_display_name=treatment.status.display_name,
        start_date=treatment.start_date,
        end_date=treatment.end_date,
        estimated_cost=treatment.estimated_cost,
        actual_cost=treatment.actual_cost,
        notes=treatment.notes,
        duration=treatment.duration,
        is_active=treatment.is_active,
        is_completed=treatment.is_completed,
        requires_multiple_sessions=treatment.type.requires_multiple_sessions,
        photos_count=len(treatment.photos),
        created_at=treatment.created_at,
        updated_at=treatment.updated_at,
    )


# =============================================================================
# TREATMENT ENDPOINTS
# =============================================================================

@treatments_router.get("", response_model=TreatmentList)
def list_treatments(
        pagination: PaginationParams = Depends(),
        patient_id: Optional[UUID] = Query(None, description="Filtrer par patient"),
        status: Optional[str] = Query(None, description="Filtrer par statut (insensible à la casse)"),
        sort_by: str = Query("start_date", description="Champ de tri"),
        sort_order: str = Query("desc", pattern="^(asc|desc)$", description="Ordre de tri"),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les traitements avec filtres."""
    filters = TreatmentFilters(patient_id=patient_id, status=status)
    service = TreatmentService(db)
    items, total = service.get_all(
        page=pagination.page,
        size=pagination.size,
        sort_by=sort_by,
        sort_order=sort_order,
        filters=filters,
    )
    return TreatmentList(
        items=[_build_treatment_response(t) for t in items],
        **page_meta(total, pagination),
    )


@treatments_router.get("/{treatment_id}", response_model=TreatmentResponse)
def get_treatment(
        treatment_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Récupère un traitement."""
    return _build_treatment_response(TreatmentService(db).get_by_id(treatment_id))


@treatments_router.post("", response_model=TreatmentResponse, status_code=status.HTTP_201_CREATED)
def create_treatment(
        data: TreatmentCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Planifie un nouveau traitement."""
    return _build_treatment_response(TreatmentService(db).create(data))


@treatments_router.put("/{treatment_id}", response_model=TreatmentResponse)
def update_treatment(
        treatment_id: UUID,
        data: TreatmentUpdate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Met à jour titre, description et coût estimé."""
    return _build_treatment_response(TreatmentService(db).update(treatment_id, data))


@treatments_router.delete("/{treatment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_treatment(
        treatment_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_patients")),
):
    """Supprime un traitement planifié ou annulé."""
    TreatmentService(db).delete(treatment_id)


# =============================================================================
# WORKFLOW ENDPOINTS
# =============================================================================

@treatments_router.post("/{treatment_id}/start", response_model=TreatmentResponse)
def start_treatment(
        treatment_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("perform_treatments")),
):
    """Démarre un traitement planifié."""
    return _build_treatment_response(TreatmentService(db).start(treatment_id))


@treatments_router.post("/{treatment_id}/complete", response_model=TreatmentResponse)
def complete_treatment(
        treatment_id: UUID,
        data: TreatmentComplete,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("perform_treatments")),
):
    """Termine un traitement en cours."""
    return _build_treatment_response(TreatmentService(db).complete(treatment_id, data))


@treatments_router.post("/{treatment_id}/cancel", response_model=TreatmentResponse)
def cancel_treatment(
        treatment_id: UUID,
        data: TreatmentCancel,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Annule un traitement (impossible s'il est terminé)."""
    return _build_treatment_response(TreatmentService(db).cancel(treatment_id, data))


# =============================================================================
# PATIENT TREATMENTS
# =============================================================================

@patient_treatments_router.get("", response_model=List[TreatmentResponse])
def list_patient_treatments(
        patient_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les traitements d'un patient."""
    treatments = TreatmentService(db).get_by_patient(patient_id)
    return [_build_treatment_response(t) for t in treatments]


router.include_router(treatments_router)
router.include_router(patient_treatments_router)
