"""
Treatment models - Traitements et imagerie.

- Treatment : Acte dentaire d'un patient
- Photo : Cliché rattaché à un traitement
- Analysis : Analyse d'un cliché
"""

from dentaltrack.models.treatment.treatment import Treatment
from dentaltrack.models.treatment.photo import Photo
from dentaltrack.models.treatment.analysis import Analysis

__all__ = ["Treatment", "Photo", "Analysis"]
