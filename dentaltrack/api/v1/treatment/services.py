"""
Services métier pour le module Treatment.

Contient :
- TreatmentService : CRUD, filtres, tri et transitions de statut

Les transitions invalides sont levées en ValueError par le modèle
puis converties en TreatmentStatusError (400).
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from dentaltrack.core.exceptions import NotFoundError, InvalidOperationError, DomainValidationError
from dentaltrack.models.enums import TreatmentStatus
from dentaltrack.models.patient.patient import Patient
from dentaltrack.models.treatment.treatment import Treatment
from dentaltrack.models.types import utcnow

from dentaltrack.api.v1.patient.services import PatientNotFoundError
from dentaltrack.api.v1.treatment.schemas import (
    TreatmentCreate, TreatmentUpdate, TreatmentComplete, TreatmentCancel,
    TreatmentFilters, TREATMENT_SORT_FIELDS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class TreatmentNotFoundError(NotFoundError):
    """Traitement non trouvé."""
    pass


class TreatmentStatusError(InvalidOperationError):
    """Transition de statut invalide."""
    pass


class TreatmentNotDeletableError(InvalidOperationError):
    """Seuls les traitements planifiés ou annulés peuvent être supprimés."""
    pass


class InvalidTreatmentDataError(DomainValidationError):
    """Données de traitement invalides."""
    pass


# =============================================================================
# TREATMENT SERVICE
# =============================================================================

class TreatmentService:
    """Service pour la gestion des traitements."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return select(Treatment).options(
            selectinload(Treatment.patient),
            selectinload(Treatment.photos),
        )

    def _get_patient(self, patient_id: UUID) -> Patient:
        patient = self.db.get(Patient, patient_id)
        if not patient:
            raise PatientNotFoundError(f"Patient {patient_id} non trouvé")
        return patient

    def get_all(
            self,
            page: int = 1,
            size: int = 10,
            sort_by: str = "start_date",
            sort_order: str = "desc",
            filters: Optional[TreatmentFilters] = None,
    ) -> Tuple[List[Treatment], int]:
        """
        Liste les traitements avec pagination, filtres et tri.

        Un statut inconnu dans les filtres est ignoré.
        """
        query = self._base_query()

        if filters:
            if filters.patient_id:
                query = query.where(Treatment.patient_id == filters.patient_id)

            status = TreatmentStatus.parse(filters.status)
            if status is not None:
                query = query.where(Treatment.status == status)

        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.scalar(count_query)

        if sort_by not in TREATMENT_SORT_FIELDS:
            sort_by = "start_date"

        if sort_by == "patient_name":
            query = query.join(Treatment.patient)
            columns = [Patient.last_name, Patient.first_name]
        else:
            columns = [getattr(Treatment, sort_by)]

        if sort_order == "asc":
            query = query.order_by(*[c.asc() for c in columns], Treatment.id)
        else:
            query = query.order_by(*[c.desc() for c in columns], Treatment.id)

        query = query.offset((page - 1) * size).limit(size)
        items = list(self.db.scalars(query).all())

        return items, total

    def get_by_id(self, treatment_id: UUID) -> Treatment:
        treatment = self.db.scalar(self._base_query().where(Treatment.id == treatment_id))
        if not treatment:
            raise TreatmentNotFoundError(f"Traitement {treatment_id} non trouvé")
        return treatment

    def get_by_patient(self, patient_id: UUID) -> List[Treatment]:
        """Traitements d'un patient, du plus récent au plus ancien."""
        self._get_patient(patient_id)
        query = (
            self._base_query()
            .where(Treatment.patient_id == patient_id)
            .order_by(Treatment.start_date.desc())
        )
        return list(self.db.scalars(query).all())

    def create(self, data: TreatmentCreate) -> Treatment:
        self._get_patient(data.patient_id)

        treatment = Treatment(
            patient_id=data.patient_id,
            type=data.type,
            title=data.title,
            description=data.description,
            estimated_cost=data.estimated_cost,
            start_date=data.start_date or utcnow(),
            status=TreatmentStatus.PLANNED,
        )
        self.db.add(treatment)
        self.db.commit()

        logger.info("Traitement créé : %s pour le patient %s", treatment.id, data.patient_id)
        return self.get_by_id(treatment.id)

    def update(self, treatment_id: UUID, data: TreatmentUpdate) -> Treatment:
        treatment = self.get_by_id(treatment_id)
        try:
            treatment.update_details(data.title, data.description, data.estimated_cost)
        except ValueError as e:
            raise InvalidTreatmentDataError(str(e))

        self.db.commit()
        self.db.refresh(treatment)
        return treatment

    def delete(self, treatment_id: UUID) -> None:
        treatment = self.get_by_id(treatment_id)
        if not treatment.is_deletable:
            raise TreatmentNotDeletableError(
                f"Impossible de supprimer un traitement au statut {treatment.status.value}"
            )
        self.db.delete(treatment)
        self.db.commit()
        logger.info("Traitement supprimé : %s", treatment_id)

    # =========================================================================
    # WORKFLOW
    # =========================================================================

    def start(self, treatment_id: UUID) -> Treatment:
        """Démarre un traitement planifié."""
        treatment = self.get_by_id(treatment_id)
        try:
            treatment.start()
        except ValueError as e:
            raise TreatmentStatusError(str(e))

        self.db.commit()
        self.db.refresh(treatment)
        logger.info("Traitement démarré : %s", treatment_id)
        return treatment

    def complete(self, treatment_id: UUID, data: TreatmentComplete) -> Treatment:
        """Termine un traitement en cours."""
        treatment = self.get_by_id(treatment_id)
        try:
            treatment.complete(actual_cost=data.actual_cost, notes=data.notes)
        except ValueError as e:
            raise TreatmentStatusError(str(e))

        self.db.commit()
        self.db.refresh(treatment)
        logger.info("Traitement terminé : %s", treatment_id)
        return treatment

    def cancel(self, treatment_id: UUID, data: TreatmentCancel) -> Treatment:
        """Annule un traitement non terminé."""
        treatment = self.get_by_id(treatment_id)
        try:
            treatment.cancel(reason=data.reason)
        except ValueError as e:
            raise TreatmentStatusError(str(e))

        self.db.commit()
        self.db.refresh(treatment)
        logger.info("Traitement annulé : %s", treatment_id)
        return treatment
