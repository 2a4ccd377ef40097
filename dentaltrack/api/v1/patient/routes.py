"""
Routes FastAPI pour le module Patient.

Endpoints :
- GET    /patients               : Liste paginée (recherche, tri)
- GET    /patients/{id}          : Détail
- POST   /patients               : Création
- PUT    /patients/{id}          : Mise à jour complète
- DELETE /patients/{id}          : Suppression logique
- POST   /patients/{id}/activate : Réactivation

Les erreurs métier (404, 409, 400) sont converties par les handlers globaux.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user, require_permission
from dentaltrack.database.session import get_db
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dependencies import PaginationParams, page_meta
from dentaltrack.api.v1.patient.schemas import (
    PatientCreate, PatientUpdate, PatientResponse, PatientList, PatientFilters,
)
from dentaltrack.api.v1.patient.services import PatientService

# =============================================================================
# ROUTERS
# =============================================================================

router = APIRouter(tags=["Patients"])
patients_router = APIRouter(prefix="/patients", tags=["Patients"])


@patients_router.get("", response_model=PatientList)
def list_patients(
        pagination: PaginationParams = Depends(),
        search: Optional[str] = Query(None, max_length=100, description="Nom, email ou téléphone"),
        sort_by: str = Query("last_name", description="Champ de tri"),
        sort_order: str = Query("asc", pattern="^(asc|desc)$", description="Ordre de tri"),
        include_inactive: bool = Query(False, description="Inclure les patients désactivés"),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les patients avec recherche et tri."""
    filters = PatientFilters(search=search, include_inactive=include_inactive)
    service = PatientService(db)
    items, total = service.get_all(
        page=pagination.page,
        size=pagination.size,
        sort_by=sort_by,
        sort_order=sort_order,
        filters=filters,
    )
    return PatientList(items=items, **page_meta(total, pagination))


@patients_router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(
        patient_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Récupère un patient par son ID."""
    return PatientService(db).get_by_id(patient_id)


@patients_router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient(
        data: PatientCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Crée un nouveau patient."""
    return PatientService(db).create(data)


@patients_router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
        patient_id: UUID,
        data: PatientUpdate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Met à jour un patient (remplacement complet)."""
    return PatientService(db).update(patient_id, data)


@patients_router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(
        patient_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_patients")),
):
    """Désactive un patient (refusé si un traitement est en cours)."""
    PatientService(db).delete(patient_id)


@patients_router.post("/{patient_id}/activate", response_model=PatientResponse)
def activate_patient(
        patient_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(require_permission("manage_patients")),
):
    """Réactive un patient désactivé."""
    return PatientService(db).activate(patient_id)


router.include_router(patients_router)
