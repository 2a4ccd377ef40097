"""
Schémas Pydantic pour le module Treatment.

Contient les schémas pour :
- Treatment : création, mise à jour, réponse, liste
- Transitions : démarrage, fin (coût réel, notes), annulation (motif)
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, ConfigDict

from dentaltrack.api.v1.dependencies import PageMeta
from dentaltrack.models.enums import TreatmentType, TreatmentStatus


MAX_COST = Decimal("1000000")
MAX_START_DATE_AGE_DAYS = 30

TREATMENT_SORT_FIELDS = ["start_date", "end_date", "status", "type", "patient_name", "created_at"]


def _normalize_enum_name(v):
    """Accepte 'root canal', 'Root_Canal'... pour ROOT_CANAL."""
    if isinstance(v, str):
        return v.strip().upper().replace(" ", "_")
    return v


# =============================================================================
# TREATMENT SCHEMAS
# =============================================================================

class TreatmentCreate(BaseModel):
    """Schéma pour créer un traitement."""
    patient_id: UUID = Field(..., description="ID du patient")
    type: TreatmentType = Field(..., description="Type d'acte")
    title: str = Field(..., min_length=1, max_length=200, description="Intitulé")
    description: Optional[str] = Field(None, max_length=1000)
    estimated_cost: Optional[Decimal] = Field(
        None, ge=0, lt=MAX_COST, max_digits=10, decimal_places=2, description="Coût estimé"
    )
    start_date: Optional[datetime] = Field(None, description="Date de début (maintenant par défaut)")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return _normalize_enum_name(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre est obligatoire")
        return v.strip()

    @field_validator("start_date")
    @classmethod
    def validate_start_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        # Borne au début de la journée, pas à l'heure courante
        oldest = (datetime.now(timezone.utc) - timedelta(days=MAX_START_DATE_AGE_DAYS)).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        if v < oldest:
            raise ValueError(
                f"La date de début ne peut pas être antérieure de plus de {MAX_START_DATE_AGE_DAYS} jours"
            )
        return v


class TreatmentUpdate(BaseModel):
    """Schéma pour mettre à jour les informations d'un traitement."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    estimated_cost: Optional[Decimal] = Field(
        None, ge=0, le=MAX_COST, max_digits=10, decimal_places=2
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre est obligatoire")
        return v.strip()


class TreatmentComplete(BaseModel):
    """Schéma pour terminer un traitement."""
    actual_cost: Optional[Decimal] = Field(
        None, ge=0, le=MAX_COST, max_digits=10, decimal_places=2, description="Coût réel"
    )
    notes: Optional[str] = Field(None, max_length=2000)


class TreatmentCancel(BaseModel):
    """Schéma pour annuler un traitement."""
    reason: Optional[str] = Field(None, max_length=2000, description="Motif d'annulation")


class TreatmentResponse(BaseModel):
    """Schéma de réponse pour un traitement."""
    id: UUID
    patient_id: UUID
    patient_name: Optional[str] = None
    type: TreatmentType
    type_display_name: str
    title: str
    description: Optional[str] = None
    status: TreatmentStatus
    status_display_name: str
    start_date: datetime
    end_date: Optional[datetime] = None
    estimated_cost: Optional[Decimal] = None
    actual_cost: Optional[Decimal] = None
    notes: Optional[str] = None

    # Propriétés calculées
    duration: Optional[timedelta] = None
    is_active: bool
    is_completed: bool
    requires_multiple_sessions: bool
    photos_count: int = 0

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TreatmentList(PageMeta):
    """Liste paginée de traitements."""
    items: List[TreatmentResponse]


class TreatmentFilters(BaseModel):
    """Filtres pour la liste des traitements."""
    patient_id: Optional[UUID] = None
    status: Optional[str] = None
