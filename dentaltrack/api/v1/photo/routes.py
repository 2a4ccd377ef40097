"""
Routes FastAPI pour le module Photo.

Endpoints pour :
- /photos : Consultation, mise à jour, suppression des clichés
- /treatments/{id}/photos : Enregistrement et liste par traitement
- /patients/{id}/photos : Clichés d'un patient
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user
from dentaltrack.database.session import get_db
from dentaltrack.models.enums import PhotoType, PhotoQuality
from dentaltrack.models.treatment.photo import Photo
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dependencies import PaginationParams, page_meta
from dentaltrack.api.v1.photo.schemas import (
    PhotoCreate, PhotoUpdate, PhotoResponse, PhotoList, PhotoFilters, PhotoMetadataResponse,
)
from dentaltrack.api.v1.photo.services import PhotoService

# =============================================================================
# ROUTERS
# =============================================================================

router = APIRouter(tags=["Photos"])
photos_router = APIRouter(prefix="/photos", tags=["Photos"])
treatment_photos_router = APIRouter(prefix="/treatments/{treatment_id}/photos", tags=["Photos"])
patient_photos_router = APIRouter(prefix="/patients/{patient_id}/photos", tags=["Photos"])


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _build_metadata_response(photo: Photo) -> Optional[PhotoMetadataResponse]:
    if not photo.image_metadata:
        return None
    return PhotoMetadataResponse(
        **photo.image_metadata,
        aspect_ratio=photo.aspect_ratio,
        total_pixels=photo.total_pixels,
        is_high_resolution=photo.is_high_resolution,
        resolution_description=photo.resolution_description,
    )


def _build_photo_response(photo: Photo) -> PhotoResponse:
    """Construit la réponse pour un cliché."""
    return PhotoResponse(
        id=photo.id,
        treatment_id=photo.treatment_id,
        file_name=photo.file_name,
        file_path=photo.file_path,
        content_type=photo.content_type,
        file_size=photo.file_size,
        file_extension=photo.file_extension,
        type=photo.type,
        type_display_name=photo.type.display_name,
        description=photo.description,
        tooth_number=photo.tooth_number,
        quality=photo.quality,
        quality_display_name=photo.quality.display_name,
        is_processed=photo.is_processed,
        is_x_ray=photo.is_x_ray,
        is_high_quality=photo.is_high_quality,
        requires_review=photo.requires_review,
        analyses_count=len(photo.analyses),
        metadata=_build_metadata_response(photo),
        created_at=photo.created_at,
        updated_at=photo.updated_at,
    )


# =============================================================================
# PHOTO ENDPOINTS
# =============================================================================

@photos_router.get("", response_model=PhotoList)
def list_photos(
        pagination: PaginationParams = Depends(),
        treatment_id: Optional[UUID] = Query(None, description="Filtrer par traitement"),
        type: Optional[PhotoType] = Query(None, description="Filtrer par type"),
        quality: Optional[PhotoQuality] = Query(None, description="Filtrer par qualité"),
        is_processed: Optional[bool] = Query(None),
        requires_review: Optional[bool] = Query(None, description="Qualité PENDING ou LOW"),
        tooth_number: Optional[int] = Query(None, ge=1, le=32),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les clichés avec filtres."""
    filters = PhotoFilters(
        treatment_id=treatment_id,
        type=type,
        quality=quality,
        is_processed=is_processed,
        requires_review=requires_review,
        tooth_number=tooth_number,
    )
    items, total = PhotoService(db).get_all(
        page=pagination.page,
        size=pagination.size,
        filters=filters,
    )
    return PhotoList(
        items=[_build_photo_response(p) for p in items],
        **page_meta(total, pagination),
    )


@photos_router.get("/{photo_id}", response_model=PhotoResponse)
def get_photo(
        photo_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Récupère un cliché."""
    return _build_photo_response(PhotoService(db).get_by_id(photo_id))


@photos_router.patch("/{photo_id}", response_model=PhotoResponse)
def update_photo(
        photo_id: UUID,
        data: PhotoUpdate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Met à jour la légende, la dent ou la qualité d'un cliché."""
    return _build_photo_response(PhotoService(db).update(photo_id, data))


@photos_router.post("/{photo_id}/processed", response_model=PhotoResponse)
def mark_photo_processed(
        photo_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Marque un cliché comme traité."""
    return _build_photo_response(PhotoService(db).mark_as_processed(photo_id))


@photos_router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
        photo_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Supprime un cliché et ses analyses."""
    PhotoService(db).delete(photo_id)


# =============================================================================
# TREATMENT / PATIENT PHOTOS
# =============================================================================

@treatment_photos_router.post("", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
def create_treatment_photo(
        treatment_id: UUID,
        data: PhotoCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Enregistre un cliché pour un traitement."""
    return _build_photo_response(PhotoService(db).create(treatment_id, data))


@treatment_photos_router.get("", response_model=List[PhotoResponse])
def list_treatment_photos(
        treatment_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste les clichés d'un traitement."""
    return [_build_photo_response(p) for p in PhotoService(db).get_by_treatment(treatment_id)]


@patient_photos_router.get("", response_model=List[PhotoResponse])
def list_patient_photos(
        patient_id: UUID,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Liste tous les clichés d'un patient."""
    return [_build_photo_response(p) for p in PhotoService(db).get_by_patient(patient_id)]


router.include_router(photos_router)
router.include_router(treatment_photos_router)
router.include_router(patient_photos_router)
