"""
Configuration du logging DentalTrack.

Un seul point de configuration, appelé au démarrage de l'application.
Les modules utilisent ensuite `logging.getLogger(__name__)`.
"""

import logging
import sys
from typing import Optional

from dentaltrack.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers tiers trop bavards en DEBUG
_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "multipart")


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure le logger racine depuis LOG_LEVEL.

    Args:
        level: Niveau explicite (prioritaire sur settings.LOG_LEVEL)
    """
    log_level = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.INFO if settings.DATABASE_ECHO else logging.WARNING
        )

    logging.getLogger(__name__).debug("Logging configuré (niveau %s)", log_level)
