"""
Photos - Clichés rattachés à un traitement.

Le fichier binaire est stocké en dehors de la base : seul son
emplacement et ses métadonnées (taille, EXIF, qualité) sont enregistrés.
"""

from __future__ import annotations

import uuid
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import String, Integer, BigInteger, Boolean, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dentaltrack.database.base_class import Base
from dentaltrack.models.enums import PhotoQuality, PhotoType
from dentaltrack.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from dentaltrack.models.types import JSONImageMetadata

if TYPE_CHECKING:
    from dentaltrack.models.treatment.treatment import Treatment
    from dentaltrack.models.treatment.analysis import Analysis


# Seuil "haute résolution" : 2 mégapixels
HIGH_RESOLUTION_PIXELS = 2_000_000

MIN_TOOTH_NUMBER = 1
MAX_TOOTH_NUMBER = 32


class Photo(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Cliché dentaire.

    Attributes:
        treatment_id: Traitement concerné
        file_name / file_path / content_type / file_size: Fichier stocké
        type: Type de cliché (PhotoType)
        description: Légende
        tooth_number: Dent concernée (1-32)
        quality: Qualité évaluée (PENDING tant que non revue)
        is_processed: Traitement d'image effectué
        image_metadata: Métadonnées EXIF (width, height, camera_model...)
    """

    __tablename__ = "photos"
    __table_args__ = (
        {"comment": "Clichés dentaires"}
    )

    # === Références ===
    treatment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("treatments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Traitement concerné"
    )

    # === Fichier ===
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Taille en octets"
    )

    # === Classification ===
    type: Mapped[PhotoType] = mapped_column(
        SQLEnum(PhotoType, name="photo_type_enum", create_constraint=True),
        nullable=False,
        index=True,
    )

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    tooth_number: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Numéro de dent (1-32)"
    )

    quality: Mapped[PhotoQuality] = mapped_column(
        SQLEnum(PhotoQuality, name="photo_quality_enum", create_constraint=True),
        nullable=False,
        default=PhotoQuality.PENDING,
        index=True,
    )

    is_processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    image_metadata: Mapped[Dict[str, Any] | None] = mapped_column(
        JSONImageMetadata,
        nullable=True,
        comment="Métadonnées EXIF"
    )

    # === Relations ===
    treatment: Mapped["Treatment"] = relationship(
        "Treatment",
        back_populates="photos"
    )

    analyses: Mapped[List["Analysis"]] = relationship(
        "Analysis",
        back_populates="photo",
        cascade="all, delete-orphan",
        order_by="Analysis.created_at",
    )

    # === Méthodes ===
    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, file_name='{self.file_name}', type='{self.type.value}')>"

    @property
    def file_extension(self) -> str:
        return PurePosixPath(self.file_name).suffix.lower()

    @property
    def is_high_quality(self) -> bool:
        return self.quality == PhotoQuality.HIGH

    @property
    def requires_review(self) -> bool:
        return self.quality.requires_review

    @property
    def is_x_ray(self) -> bool:
        return self.type.is_x_ray

    # --- Métadonnées calculées ---

    @property
    def width(self) -> Optional[int]:
        return (self.image_metadata or {}).get("width")

    @property
    def height(self) -> Optional[int]:
        return (self.image_metadata or {}).get("height")

    @property
    def aspect_ratio(self) -> Optional[float]:
        if not self.width or not self.height:
            return None
        return self.width / self.height

    @property
    def total_pixels(self) -> Optional[int]:
        if not self.width or not self.height:
            return None
        return self.width * self.height

    @property
    def is_high_resolution(self) -> bool:
        return (self.total_pixels or 0) >= HIGH_RESOLUTION_PIXELS

    @property
    def resolution_description(self) -> Optional[str]:
        """Ex : "4000x3000 (12.0MP)"."""
        if self.total_pixels is None:
            return None
        megapixels = self.total_pixels / 1_000_000
        return f"{self.width}x{self.height} ({megapixels:.1f}MP)"

    # --- Mutations ---

    def update_description(self, description: Optional[str]) -> None:
        self.description = description

    def set_quality(self, quality: PhotoQuality) -> None:
        self.quality = quality

    def mark_as_processed(self) -> None:
        self.is_processed = True

    def update_tooth_number(self, tooth_number: Optional[int]) -> None:
        if tooth_number is not None and not (MIN_TOOTH_NUMBER <= tooth_number <= MAX_TOOTH_NUMBER):
            raise ValueError(
                f"Le numéro de dent doit être compris entre {MIN_TOOTH_NUMBER} et {MAX_TOOTH_NUMBER}"
            )
        self.tooth_number = tooth_number
