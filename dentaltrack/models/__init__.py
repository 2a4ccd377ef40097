"""
DentalTrack Models - Export centralisé de tous les modèles SQLAlchemy.

    from dentaltrack.models import User, Patient, Treatment, Photo, Analysis

Structure des sous-dossiers :
    user/       - Utilisateurs du cabinet (User)
    patient/    - Dossier patient (Patient)
    treatment/  - Traitements et imagerie (Treatment, Photo, Analysis)
"""

from dentaltrack.database.base_class import Base

# === Enums ===
from dentaltrack.models.enums import (
    UserRole,
    TreatmentType,
    TreatmentStatus,
    PhotoType,
    PhotoQuality,
    AnalysisType,
    AnalysisStatus,
)

# === Modèles (ordre des dépendances FK) ===
from dentaltrack.models.user import User
from dentaltrack.models.patient import Patient
from dentaltrack.models.treatment import Treatment, Photo, Analysis

__all__ = [
    "Base",
    # Enums
    "UserRole",
    "TreatmentType",
    "TreatmentStatus",
    "PhotoType",
    "PhotoQuality",
    "AnalysisType",
    "AnalysisStatus",
    # Modèles
    "User",
    "Patient",
    "Treatment",
    "Photo",
    "Analysis",
]
