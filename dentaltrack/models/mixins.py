"""
Mixins réutilisables pour les modèles SQLAlchemy.

Ce module définit des mixins qui ajoutent des colonnes communes
à plusieurs modèles (identifiant UUID, timestamps).
"""

import uuid
from datetime import datetime

from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dentaltrack.models.types import UTCDateTime, utcnow


class UUIDPrimaryKeyMixin:
    """
    Mixin ajoutant une clé primaire UUID générée côté application.

    Usage:
        class MyModel(UUIDPrimaryKeyMixin, Base):
            __tablename__ = "my_table"
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="Identifiant unique",
    )


class TimestampMixin:
    """
    Mixin ajoutant les colonnes created_at et updated_at.

    - created_at : auto-rempli à la création
    - updated_at : auto-mis à jour à chaque modification

    Usage:
        class MyModel(TimestampMixin, Base):
            __tablename__ = "my_table"
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
        doc="Date et heure de création",
        info={"description": "Timestamp de création", "auto_generated": True}
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        default=None,
        onupdate=utcnow,
        nullable=True,
        doc="Date et heure de dernière modification",
        info={"description": "Timestamp de mise à jour", "auto_generated": True}
    )
