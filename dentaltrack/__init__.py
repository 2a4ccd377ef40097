"""
DentalTrack - API de gestion de cabinet dentaire.
"""

__version__ = "0.1.0"
