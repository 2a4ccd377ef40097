"""
Crée les tables et insère les données de démonstration.

Usage:
    python scripts/seed_data.py

N'insère rien si la base contient déjà des utilisateurs ou des patients.
"""

import logging
import sys

from dentaltrack.core.logging import configure_logging
from dentaltrack.database.init_db import init_db

logger = logging.getLogger("seed_data")


if __name__ == "__main__":
    configure_logging()
    if not init_db(seed=True):
        logger.error("Échec de l'initialisation")
        sys.exit(1)
    logger.info("Base initialisée")
