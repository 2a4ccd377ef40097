"""
Schémas Pydantic pour le module Patient.
"""
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict

from dentaltrack.api.v1.dependencies import PageMeta


PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"
MAX_AGE_YEARS = 150

PATIENT_SORT_FIELDS = ["first_name", "last_name", "email", "date_of_birth", "created_at"]


def _years_ago(years: int, reference: date) -> date:
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        # 29 février → 28 février
        return reference.replace(year=reference.year - years, day=28)


# =============================================================================
# PATIENT SCHEMAS
# =============================================================================

class PatientBase(BaseModel):
    """Champs communs pour Patient."""
    first_name: str = Field(..., min_length=1, max_length=100, description="Prénom")
    last_name: str = Field(..., min_length=1, max_length=100, description="Nom")
    email: EmailStr = Field(..., description="Email (unique, 255 caractères max)")
    phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)
    date_of_birth: date = Field(..., description="Date de naissance")
    gender: Optional[str] = Field(None, max_length=10)
    address: Optional[str] = Field(None, max_length=500)
    emergency_contact: Optional[str] = Field(None, max_length=100)
    emergency_phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)
    medical_history: Optional[str] = Field(None, max_length=2000)
    allergies: Optional[str] = Field(None, max_length=1000)

    @field_validator(
        "phone", "gender", "address", "emergency_contact", "emergency_phone",
        "medical_history", "allergies",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Ce champ est obligatoire")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > 255:
            raise ValueError("L'email ne doit pas dépasser 255 caractères")
        return v.lower()

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date) -> date:
        today = date.today()
        if v >= today:
            raise ValueError("La date de naissance doit être dans le passé")
        if v <= _years_ago(MAX_AGE_YEARS, today):
            raise ValueError(f"La date de naissance ne peut pas dépasser {MAX_AGE_YEARS} ans")
        return v


class PatientCreate(PatientBase):
    """Schéma pour créer un patient."""
    pass


class PatientUpdate(PatientBase):
    """Schéma pour mettre à jour un patient (remplacement complet, PUT)."""
    pass


class PatientResponse(BaseModel):
    """Schéma de réponse pour un patient."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: date
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None
    is_active: bool

    # Propriétés calculées
    full_name: str
    age: int

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PatientList(PageMeta):
    """Liste paginée de patients."""
    items: List[PatientResponse]


class PatientFilters(BaseModel):
    """Filtres pour la recherche de patients."""
    search: Optional[str] = None
    include_inactive: bool = False
