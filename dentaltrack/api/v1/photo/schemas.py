"""
Schémas Pydantic pour le module Photo.

Contient les schémas pour :
- PhotoMetadata : Métadonnées EXIF (dimensions, appareil, prise de vue)
- Photo : enregistrement, mise à jour partielle, réponse, liste
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, ConfigDict

from dentaltrack.api.v1.dependencies import PageMeta
from dentaltrack.models.enums import PhotoType, PhotoQuality
from dentaltrack.models.treatment.photo import MIN_TOOTH_NUMBER, MAX_TOOTH_NUMBER


def _normalize_enum_name(v):
    if isinstance(v, str):
        return v.strip().upper().replace(" ", "_").replace("-", "")
    return v


# =============================================================================
# METADATA SCHEMAS
# =============================================================================

class PhotoMetadata(BaseModel):
    """Métadonnées EXIF d'un cliché."""
    width: int = Field(..., gt=0, description="Largeur en pixels")
    height: int = Field(..., gt=0, description="Hauteur en pixels")
    camera_model: Optional[str] = Field(None, max_length=100)
    camera_make: Optional[str] = Field(None, max_length=100)
    date_taken: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=200)
    exposure_time: Optional[float] = Field(None, gt=0, description="Temps d'exposition (s)")
    f_number: Optional[float] = Field(None, gt=0)
    iso: Optional[int] = Field(None, gt=0)
    flash: Optional[str] = Field(None, max_length=50)
    focal_length: Optional[float] = Field(None, gt=0, description="Focale (mm)")


class PhotoMetadataResponse(PhotoMetadata):
    """Métadonnées avec valeurs calculées."""
    aspect_ratio: float
    total_pixels: int
    is_high_resolution: bool
    resolution_description: str


# =============================================================================
# PHOTO SCHEMAS
# =============================================================================

class PhotoCreate(BaseModel):
    """Schéma pour enregistrer un cliché déjà stocké."""
    file_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=500)
    content_type: str = Field(..., min_length=1, max_length=100)
    file_size: int = Field(..., gt=0, description="Taille en octets")
    type: PhotoType
    description: Optional[str] = Field(None, max_length=500)
    tooth_number: Optional[int] = Field(None, ge=MIN_TOOTH_NUMBER, le=MAX_TOOTH_NUMBER)
    metadata: Optional[PhotoMetadata] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return _normalize_enum_name(v)


class PhotoUpdate(BaseModel):
    """Schéma pour la mise à jour partielle (PATCH) d'un cliché."""
    description: Optional[str] = Field(None, max_length=500)
    tooth_number: Optional[int] = Field(None, ge=MIN_TOOTH_NUMBER, le=MAX_TOOTH_NUMBER)
    quality: Optional[PhotoQuality] = None

    @field_validator("quality", mode="before")
    @classmethod
    def normalize_quality(cls, v):
        return _normalize_enum_name(v)


class PhotoResponse(BaseModel):
    """Schéma de réponse pour un cliché."""
    id: UUID
    treatment_id: UUID
    file_name: str
    file_path: str
    content_type: str
    file_size: int
    file_extension: str
    type: PhotoType
    type_display_name: str
    description: Optional[str] = None
    tooth_number: Optional[int] = None
    quality: PhotoQuality
    quality_display_name: str
    is_processed: bool

    # Propriétés calculées
    is_x_ray: bool
    is_high_quality: bool
    requires_review: bool
    analyses_count: int = 0

    metadata: Optional[PhotoMetadataResponse] = None

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PhotoList(PageMeta):
    """Liste paginée de clichés."""
    items: List[PhotoResponse]


class PhotoFilters(BaseModel):
    """Filtres pour la liste des clichés."""
    treatment_id: Optional[UUID] = None
    type: Optional[PhotoType] = None
    quality: Optional[PhotoQuality] = None
    is_processed: Optional[bool] = None
    requires_review: Optional[bool] = None
    tooth_number: Optional[int] = None
