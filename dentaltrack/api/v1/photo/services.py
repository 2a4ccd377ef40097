"""
Services métier pour le module Photo.

Contient :
- PhotoService : enregistrement, consultation, mise à jour et suppression
  des clichés rattachés aux traitements.
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from dentaltrack.core.exceptions import NotFoundError, DomainValidationError
from dentaltrack.models.enums import PhotoQuality
from dentaltrack.models.patient.patient import Patient
from dentaltrack.models.treatment.photo import Photo
from dentaltrack.models.treatment.treatment import Treatment

from dentaltrack.api.v1.patient.services import PatientNotFoundError
from dentaltrack.api.v1.treatment.services import TreatmentNotFoundError
from dentaltrack.api.v1.photo.schemas import PhotoCreate, PhotoUpdate, PhotoFilters

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class PhotoNotFoundError(NotFoundError):
    """Cliché non trouvé."""
    pass


class InvalidPhotoDataError(DomainValidationError):
    """Données de cliché invalides."""
    pass


# =============================================================================
# PHOTO SERVICE
# =============================================================================

REVIEW_QUALITIES = (PhotoQuality.PENDING, PhotoQuality.LOW)


class PhotoService:
    """Service pour la gestion des clichés."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return select(Photo).options(selectinload(Photo.analyses))

    def get_all(
            self,
            page: int = 1,
            size: int = 10,
            filters: Optional[PhotoFilters] = None,
    ) -> Tuple[List[Photo], int]:
        """Liste les clichés, du plus récent au plus ancien."""
        query = self._base_query()

        if filters:
            if filters.treatment_id:
                query = query.where(Photo.treatment_id == filters.treatment_id)

            if filters.type:
                query = query.where(Photo.type == filters.type)

            if filters.quality:
                query = query.where(Photo.quality == filters.quality)

            if filters.is_processed is not None:
                query = query.where(Photo.is_processed.is_(filters.is_processed))

            if filters.requires_review is True:
                query = query.where(Photo.quality.in_(REVIEW_QUALITIES))
            elif filters.requires_review is False:
                query = query.where(Photo.quality.not_in(REVIEW_QUALITIES))

            if filters.tooth_number is not None:
                query = query.where(Photo.tooth_number == filters.tooth_number)

        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.scalar(count_query)

        query = query.order_by(Photo.created_at.desc(), Photo.id)
        query = query.offset((page - 1) * size).limit(size)
        items = list(self.db.scalars(query).all())

        return items, total

    def get_by_id(self, photo_id: UUID) -> Photo:
        photo = self.db.scalar(self._base_query().where(Photo.id == photo_id))
        if not photo:
            raise PhotoNotFoundError(f"Photo {photo_id} non trouvée")
        return photo

    def get_by_treatment(self, treatment_id: UUID) -> List[Photo]:
        if not self.db.get(Treatment, treatment_id):
            raise TreatmentNotFoundError(f"Traitement {treatment_id} non trouvé")
        query = (
            self._base_query()
            .where(Photo.treatment_id == treatment_id)
            .order_by(Photo.created_at.desc())
        )
        return list(self.db.scalars(query).all())

    def get_by_patient(self, patient_id: UUID) -> List[Photo]:
        """Tous les clichés des traitements d'un patient."""
        if not self.db.get(Patient, patient_id):
            raise PatientNotFoundError(f"Patient {patient_id} non trouvé")
        query = (
            self._base_query()
            .join(Photo.treatment)
            .where(Treatment.patient_id == patient_id)
            .order_by(Photo.created_at.desc())
        )
        return list(self.db.scalars(query).all())

    def create(self, treatment_id: UUID, data: PhotoCreate) -> Photo:
        if not self.db.get(Treatment, treatment_id):
            raise TreatmentNotFoundError(f"Traitement {treatment_id} non trouvé")

        photo = Photo(
            treatment_id=treatment_id,
            file_name=data.file_name,
            file_path=data.file_path,
            content_type=data.content_type,
            file_size=data.file_size,
            type=data.type,
            description=data.description,
            tooth_number=data.tooth_number,
            quality=PhotoQuality.PENDING,
            is_processed=False,
            image_metadata=data.metadata.model_dump(mode="json") if data.metadata else None,
        )
        self.db.add(photo)
        self.db.commit()

        logger.info("Photo enregistrée : %s (traitement %s)", photo.id, treatment_id)
        return self.get_by_id(photo.id)

    def update(self, photo_id: UUID, data: PhotoUpdate) -> Photo:
        """Mise à jour partielle : seuls les champs envoyés sont modifiés."""
        photo = self.get_by_id(photo_id)
        changes = data.model_dump(exclude_unset=True)

        try:
            if "description" in changes:
                photo.update_description(changes["description"])
            if "tooth_number" in changes:
                photo.update_tooth_number(changes["tooth_number"])
            if changes.get("quality") is not None:
                photo.set_quality(changes["quality"])
        except ValueError as e:
            raise InvalidPhotoDataError(str(e))

        self.db.commit()
        self.db.refresh(photo)
        return photo

    def mark_as_processed(self, photo_id: UUID) -> Photo:
        photo = self.get_by_id(photo_id)
        photo.mark_as_processed()
        self.db.commit()
        self.db.refresh(photo)
        return photo

    def delete(self, photo_id: UUID) -> None:
        photo = self.get_by_id(photo_id)
        self.db.delete(photo)
        self.db.commit()
        logger.info("Photo supprimée : %s", photo_id)

    def get_total_file_size(self) -> int:
        return self.db.scalar(select(func.coalesce(func.sum(Photo.file_size), 0))) or 0
