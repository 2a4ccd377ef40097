"""
User models - Utilisateurs du cabinet.
"""

from dentaltrack.models.user.user import User

__all__ = ["User"]
