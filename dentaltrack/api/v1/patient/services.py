"""
Services métier pour le module Patient.

Contient la logique CRUD pour PatientService :
- liste paginée avec recherche et tri
- création / mise à jour avec unicité de l'email
- suppression logique (désactivation) et réactivation
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, func, or_, exists
from sqlalchemy.orm import Session

from dentaltrack.core.exceptions import (
    NotFoundError, ConflictError, InvalidOperationError, DomainValidationError,
)
from dentaltrack.models.enums import TreatmentStatus
from dentaltrack.models.patient.patient import Patient
from dentaltrack.models.treatment.treatment import Treatment

from dentaltrack.api.v1.patient.schemas import (
    PatientCreate, PatientUpdate, PatientFilters, PATIENT_SORT_FIELDS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class PatientNotFoundError(NotFoundError):
    """Patient non trouvé."""
    pass


class DuplicatePatientEmailError(ConflictError):
    """Email déjà utilisé par un autre patient."""
    pass


class PatientHasActiveTreatmentError(InvalidOperationError):
    """Le patient a un traitement en cours."""
    pass


class InvalidPatientDataError(DomainValidationError):
    """Données patient invalides."""
    pass


# =============================================================================
# PATIENT SERVICE
# =============================================================================

class PatientService:
    """Service pour la gestion des patients."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return select(Patient)

    def _email_taken(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(Patient.id).where(func.lower(Patient.email) == email.lower())
        if exclude_id is not None:
            query = query.where(Patient.id != exclude_id)
        return bool(self.db.scalar(select(query.exists())))

    def get_all(
            self,
            page: int = 1,
            size: int = 10,
            sort_by: str = "last_name",
            sort_order: str = "asc",
            filters: Optional[PatientFilters] = None,
    ) -> Tuple[List[Patient], int]:
        """
        Liste les patients avec pagination, recherche et tri.

        La recherche porte sur prénom, nom, email et téléphone
        (insensible à la casse). Les patients désactivés sont exclus
        sauf si filters.include_inactive est vrai.
        """
        query = self._base_query()
        filters = filters or PatientFilters()

        if not filters.include_inactive:
            query = query.where(Patient.is_active.is_(True))

        if filters.search and filters.search.strip():
            pattern = f"%{filters.search.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(Patient.first_name).like(pattern),
                    func.lower(Patient.last_name).like(pattern),
                    func.lower(Patient.email).like(pattern),
                    func.lower(Patient.phone).like(pattern),
                )
            )

        # Total avant pagination
        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.scalar(count_query)

        # Tri (champ inconnu → last_name)
        if sort_by not in PATIENT_SORT_FIELDS:
            sort_by = "last_name"
        sort_column = getattr(Patient, sort_by)
        if sort_order == "desc":
            query = query.order_by(sort_column.desc(), Patient.id)
        else:
            query = query.order_by(sort_column.asc(), Patient.id)

        query = query.offset((page - 1) * size).limit(size)
        items = list(self.db.scalars(query).all())

        return items, total

    def get_by_id(self, patient_id: UUID) -> Patient:
        patient = self.db.get(Patient, patient_id)
        if not patient:
            raise PatientNotFoundError(f"Patient {patient_id} non trouvé")
        return patient

    def create(self, data: PatientCreate) -> Patient:
        if self._email_taken(data.email):
            raise DuplicatePatientEmailError(f"Un patient avec l'email {data.email} existe déjà")

        patient = Patient(**data.model_dump())
        self.db.add(patient)
        self.db.commit()
        self.db.refresh(patient)

        logger.info("Patient créé : %s (%s)", patient.id, patient.full_name)
        return patient

    def update(self, patient_id: UUID, data: PatientUpdate) -> Patient:
        patient = self.get_by_id(patient_id)

        if self._email_taken(data.email, exclude_id=patient_id):
            raise DuplicatePatientEmailError(f"Un autre patient utilise déjà l'email {data.email}")

        try:
            patient.update_personal_info(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                date_of_birth=data.date_of_birth,
                phone=data.phone,
                gender=data.gender,
                address=data.address,
                emergency_contact=data.emergency_contact,
                emergency_phone=data.emergency_phone,
            )
        except ValueError as e:
            raise InvalidPatientDataError(str(e))
        patient.update_medical_info(data.medical_history, data.allergies)

        self.db.commit()
        self.db.refresh(patient)
        return patient

    def delete(self, patient_id: UUID) -> None:
        """
        Suppression logique : le patient est désactivé.

        Refusée si un traitement est en cours.
        """
        patient = self.get_by_id(patient_id)

        has_active = self.db.scalar(
            select(exists().where(
                Treatment.patient_id == patient_id,
                Treatment.status == TreatmentStatus.IN_PROGRESS,
            ))
        )
        if has_active:
            raise PatientHasActiveTreatmentError(
                "Impossible de supprimer un patient ayant un traitement en cours"
            )

        patient.deactivate()
        self.db.commit()
        logger.info("Patient désactivé : %s", patient_id)

    def activate(self, patient_id: UUID) -> Patient:
        patient = self.get_by_id(patient_id)
        patient.activate()
        self.db.commit()
        self.db.refresh(patient)
        return patient
