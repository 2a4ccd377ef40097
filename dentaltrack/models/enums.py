"""
Enums du domaine DentalTrack.

Chaque enum hérite de (str, Enum) : la valeur stockée en base et exposée
dans l'API est le nom en majuscules (ex: "IN_PROGRESS"). Les libellés
d'affichage sont fournis par la propriété `display_name`.
"""

from enum import Enum


# =============================================================================
# UTILISATEURS
# =============================================================================

class UserRole(str, Enum):
    """Rôles des utilisateurs du cabinet."""
    DOCTOR = "DOCTOR"          # Praticien
    ASSISTANT = "ASSISTANT"    # Assistant(e) dentaire
    ADMIN = "ADMIN"            # Administrateur

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def can_manage_patients(self) -> bool:
        return self in (UserRole.DOCTOR, UserRole.ADMIN)

    @property
    def can_view_reports(self) -> bool:
        return self in (UserRole.DOCTOR, UserRole.ADMIN)

    @property
    def can_manage_users(self) -> bool:
        return self == UserRole.ADMIN

    @property
    def can_perform_treatments(self) -> bool:
        return self == UserRole.DOCTOR


# =============================================================================
# TRAITEMENTS
# =============================================================================

class TreatmentType(str, Enum):
    """Types de traitements dentaires."""
    CONSULTATION = "CONSULTATION"
    CLEANING = "CLEANING"
    FILLING = "FILLING"
    ROOT_CANAL = "ROOT_CANAL"
    CROWN = "CROWN"
    BRIDGE = "BRIDGE"
    IMPLANT = "IMPLANT"
    EXTRACTION = "EXTRACTION"
    ORTHODONTICS = "ORTHODONTICS"
    WHITENING = "WHITENING"
    PERIODONTAL = "PERIODONTAL"
    ORAL_SURGERY = "ORAL_SURGERY"
    EMERGENCY = "EMERGENCY"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _TREATMENT_TYPE_LABELS[self]

    @property
    def requires_multiple_sessions(self) -> bool:
        return self in (
            TreatmentType.ROOT_CANAL,
            TreatmentType.ORTHODONTICS,
            TreatmentType.PERIODONTAL,
            TreatmentType.IMPLANT,
        )


_TREATMENT_TYPE_LABELS = {
    TreatmentType.CONSULTATION: "Consultation",
    TreatmentType.CLEANING: "Cleaning",
    TreatmentType.FILLING: "Filling",
    TreatmentType.ROOT_CANAL: "Root Canal",
    TreatmentType.CROWN: "Crown",
    TreatmentType.BRIDGE: "Bridge",
    TreatmentType.IMPLANT: "Implant",
    TreatmentType.EXTRACTION: "Extraction",
    TreatmentType.ORTHODONTICS: "Orthodontics",
    TreatmentType.WHITENING: "Whitening",
    TreatmentType.PERIODONTAL: "Periodontal",
    TreatmentType.ORAL_SURGERY: "Oral Surgery",
    TreatmentType.EMERGENCY: "Emergency",
    TreatmentType.OTHER: "Other",
}


class TreatmentStatus(str, Enum):
    """Statuts d'un traitement."""
    PLANNED = "PLANNED"            # Planifié
    IN_PROGRESS = "IN_PROGRESS"    # En cours
    COMPLETED = "COMPLETED"        # Terminé
    CANCELLED = "CANCELLED"        # Annulé
    ON_HOLD = "ON_HOLD"            # En attente

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: str | None) -> "TreatmentStatus | None":
        """Convertit une chaîne (insensible à la casse) ; None si inconnue."""
        if not value:
            return None
        normalized = value.strip().upper().replace(" ", "_")
        # Accepte aussi la forme CamelCase ("InProgress")
        aliases = {"INPROGRESS": "IN_PROGRESS", "ONHOLD": "ON_HOLD"}
        normalized = aliases.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


# =============================================================================
# PHOTOS
# =============================================================================

class PhotoType(str, Enum):
    """Types de clichés dentaires."""
    INTRAORAL = "INTRAORAL"
    EXTRAORAL = "EXTRAORAL"
    XRAY = "XRAY"
    PANORAMIC = "PANORAMIC"
    BITEWING = "BITEWING"
    PERIAPICAL = "PERIAPICAL"
    PROGRESS = "PROGRESS"
    BEFORE = "BEFORE"
    AFTER = "AFTER"
    CLINICAL = "CLINICAL"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _PHOTO_TYPE_LABELS[self]

    @property
    def is_x_ray(self) -> bool:
        return self in (
            PhotoType.XRAY,
            PhotoType.PANORAMIC,
            PhotoType.BITEWING,
            PhotoType.PERIAPICAL,
        )


_PHOTO_TYPE_LABELS = {
    PhotoType.INTRAORAL: "Intraoral",
    PhotoType.EXTRAORAL: "Extraoral",
    PhotoType.XRAY: "X-Ray",
    PhotoType.PANORAMIC: "Panoramic X-Ray",
    PhotoType.BITEWING: "Bitewing X-Ray",
    PhotoType.PERIAPICAL: "Periapical X-Ray",
    PhotoType.PROGRESS: "Progress Photo",
    PhotoType.BEFORE: "Before Treatment",
    PhotoType.AFTER: "After Treatment",
    PhotoType.CLINICAL: "Clinical Photo",
    PhotoType.OTHER: "Other",
}


class PhotoQuality(str, Enum):
    """Qualité d'un cliché, de PENDING (non évalué) à EXCELLENT."""
    PENDING = "PENDING"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    EXCELLENT = "EXCELLENT"

    @property
    def display_name(self) -> str:
        return _PHOTO_QUALITY_LABELS[self]

    @property
    def requires_review(self) -> bool:
        return self in (PhotoQuality.PENDING, PhotoQuality.LOW)


_PHOTO_QUALITY_LABELS = {
    PhotoQuality.PENDING: "Pending Review",
    PhotoQuality.LOW: "Low Quality",
    PhotoQuality.MEDIUM: "Medium Quality",
    PhotoQuality.HIGH: "High Quality",
    PhotoQuality.EXCELLENT: "Excellent Quality",
}


# =============================================================================
# ANALYSES
# =============================================================================

class AnalysisType(str, Enum):
    """Types d'analyses réalisées sur un cliché."""
    CARIES_DETECTION = "CARIES_DETECTION"
    PLAQUE_ANALYSIS = "PLAQUE_ANALYSIS"
    GUM_HEALTH_ASSESSMENT = "GUM_HEALTH_ASSESSMENT"
    TOOTH_ALIGNMENT = "TOOTH_ALIGNMENT"
    COLOR_MATCHING = "COLOR_MATCHING"
    QUALITY_ASSESSMENT = "QUALITY_ASSESSMENT"
    PROGRESS_COMPARISON = "PROGRESS_COMPARISON"
    ANOMALY_DETECTION = "ANOMALY_DETECTION"
    TREATMENT_PLANNING = "TREATMENT_PLANNING"
    RISK_ASSESSMENT = "RISK_ASSESSMENT"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _ANALYSIS_TYPE_LABELS[self][0]

    @property
    def description(self) -> str:
        return _ANALYSIS_TYPE_LABELS[self][1]

    @property
    def is_ai_based(self) -> bool:
        return self in (
            AnalysisType.CARIES_DETECTION,
            AnalysisType.PLAQUE_ANALYSIS,
            AnalysisType.GUM_HEALTH_ASSESSMENT,
            AnalysisType.ANOMALY_DETECTION,
            AnalysisType.TREATMENT_PLANNING,
            AnalysisType.RISK_ASSESSMENT,
        )


_ANALYSIS_TYPE_LABELS = {
    AnalysisType.CARIES_DETECTION: (
        "Caries Detection", "AI-powered detection of dental caries and cavities"),
    AnalysisType.PLAQUE_ANALYSIS: (
        "Plaque Analysis", "Analysis of plaque buildup and distribution"),
    AnalysisType.GUM_HEALTH_ASSESSMENT: (
        "Gum Health Assessment", "Assessment of gum health and periodontal condition"),
    AnalysisType.TOOTH_ALIGNMENT: (
        "Tooth Alignment", "Analysis of tooth alignment and bite"),
    AnalysisType.COLOR_MATCHING: (
        "Color Matching", "Tooth shade matching for restorations"),
    AnalysisType.QUALITY_ASSESSMENT: (
        "Quality Assessment", "Assessment of image quality for diagnosis"),
    AnalysisType.PROGRESS_COMPARISON: (
        "Progress Comparison", "Comparison of treatment progress over time"),
    AnalysisType.ANOMALY_DETECTION: (
        "Anomaly Detection", "Detection of unusual features or anomalies"),
    AnalysisType.TREATMENT_PLANNING: (
        "Treatment Planning", "AI-assisted treatment planning recommendations"),
    AnalysisType.RISK_ASSESSMENT: (
        "Risk Assessment", "Assessment of oral health risk factors"),
    AnalysisType.OTHER: (
        "Other", "Other type of analysis"),
}


class AnalysisStatus(str, Enum):
    """Statuts d'une analyse."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()
