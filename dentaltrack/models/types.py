"""
Types SQLAlchemy personnalisés pour DentalTrack.

Ce module définit des types compatibles SQLite (tests) et PostgreSQL (production).
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import TypeDecorator


# ============================================================================
# JSONBCompatible - Type JSON compatible multi-dialecte
# ============================================================================
#
# - Sur PostgreSQL : JSONB
# - Sur SQLite/autres : JSON standard
#
# ============================================================================

JSONBCompatible = JSON().with_variant(JSONB(astext_type=Text()), 'postgresql')

# Pour les colonnes qui stockent les métadonnées EXIF d'une image
JSONImageMetadata = JSONBCompatible


# ============================================================================
# UTCDateTime - Datetime toujours "aware" en UTC
# ============================================================================
#
# SQLite ne conserve pas le fuseau horaire : les valeurs relues sont naïves.
# Ce type normalise en UTC à l'écriture et ré-attache tzinfo=UTC à la lecture,
# ce qui permet de comparer sans erreur avec datetime.now(timezone.utc).
#
# ============================================================================

class UTCDateTime(TypeDecorator):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    """Datetime courant en UTC (aware)."""
    return datetime.now(timezone.utc)
