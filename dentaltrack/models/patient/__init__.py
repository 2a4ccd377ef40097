"""
Patient models - Dossier patient.
"""

from dentaltrack.models.patient.patient import Patient

__all__ = ["Patient"]
