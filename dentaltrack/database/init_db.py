"""
Initialisation de la base de données DentalTrack.

Crée les tables et, à la demande, insère des données de démonstration
(utilisateurs, patients, traitements) si la base est vide.

Usage:
    python -m dentaltrack.database.init_db           # tables seules
    python -m dentaltrack.database.init_db --seed    # tables + démo
"""

import logging
import sys
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from dentaltrack.database.base_class import Base
from dentaltrack.database.session import engine, db_session, check_database_connection
from dentaltrack.models import (
    User,
    Patient,
    Treatment,
    UserRole,
    TreatmentType,
    TreatmentStatus,
)
from dentaltrack.models.types import utcnow

logger = logging.getLogger(__name__)


# =============================================================================
# 1. CRÉATION DES TABLES
# =============================================================================

def create_tables(bind=None) -> None:
    """Crée toutes les tables déclarées sur Base.metadata."""
    Base.metadata.create_all(bind=bind or engine)
    table_names = sorted(Base.metadata.tables.keys())
    logger.info(f"{len(table_names)} tables prêtes : {', '.join(table_names)}")


# =============================================================================
# 2. DONNÉES DE DÉMONSTRATION
# =============================================================================

DEMO_USERS = [
    # email, prénom, nom, rôle, google_id
    ("dr.smith@dentaltrack.com", "John", "Smith", UserRole.DOCTOR, "google_123456"),
    ("dr.jones@dentaltrack.com", "Sarah", "Jones", UserRole.DOCTOR, None),
    ("assistant@dentaltrack.com", "Jane", "Wilson", UserRole.ASSISTANT, None),
    ("admin@dentaltrack.com", "Mike", "Johnson", UserRole.ADMIN, None),
]

DEMO_PATIENTS = [
    {
        "first_name": "Alice", "last_name": "Johnson", "email": "alice.johnson@email.com",
        "date_of_birth": date(1985, 3, 15), "phone": "+15550101", "gender": "Female",
        "address": "123 Main St, City, State 12345",
        "emergency_contact": "Bob Johnson", "emergency_phone": "+15550102",
        "medical_history": "No significant medical history", "allergies": "None known",
    },
    {
        "first_name": "Bob", "last_name": "Williams", "email": "bob.williams@email.com",
        "date_of_birth": date(1978, 7, 22), "phone": "+15550201", "gender": "Male",
        "address": "456 Oak Ave, City, State 12345",
        "emergency_contact": "Carol Williams", "emergency_phone": "+15550202",
        "medical_history": "Hypertension, controlled with medication", "allergies": "Penicillin",
    },
    {
        "first_name": "Carol", "last_name": "Brown", "email": "carol.brown@email.com",
        "date_of_birth": date(1992, 11, 8), "phone": "+15550301", "gender": "Female",
        "address": "789 Pine Rd, City, State 12345",
        "emergency_contact": "David Brown", "emergency_phone": "+15550302",
        "medical_history": "Diabetes Type 2", "allergies": "Latex",
    },
    {
        "first_name": "David", "last_name": "Davis", "email": "david.davis@email.com",
        "date_of_birth": date(1965, 1, 30), "phone": "+15550401", "gender": "Male",
        "address": "321 Elm St, City, State 12345",
        "emergency_contact": "Emma Davis", "emergency_phone": "+15550402",
        "medical_history": "Heart disease, previous surgery in 2015", "allergies": "Aspirin, Codeine",
    },
    {
        "first_name": "Emma", "last_name": "Wilson", "email": "emma.wilson@email.com",
        "date_of_birth": date(1990, 9, 12), "phone": "+15550501", "gender": "Female",
        "address": "654 Maple Dr, City, State 12345",
        "emergency_contact": "Frank Wilson", "emergency_phone": "+15550502",
        "medical_history": "No significant medical history", "allergies": "None known",
    },
]

# type, titre, description, coût estimé, statut final, jours depuis le début
DEMO_TREATMENTS = [
    (TreatmentType.CLEANING, "Routine Dental Cleaning",
     "Professional dental cleaning and examination", Decimal("150.00"), TreatmentStatus.COMPLETED, 20),
    (TreatmentType.FILLING, "Composite Filling",
     "Cavity treatment with composite resin filling", Decimal("300.00"), TreatmentStatus.IN_PROGRESS, 5),
    (TreatmentType.ROOT_CANAL, "Root Canal Therapy",
     "Endodontic treatment to save infected tooth", Decimal("1200.00"), TreatmentStatus.PLANNED, -3),
]


def is_database_empty(db: Session) -> bool:
    has_users = db.scalar(select(exists().where(User.id.is_not(None))))
    has_patients = db.scalar(select(exists().where(Patient.id.is_not(None))))
    return not has_users and not has_patients


def seed_database(db: Session) -> bool:
    """
    Insère les données de démonstration si la base est vide.

    Returns:
        True si des données ont été insérées, False sinon
    """
    if not is_database_empty(db):
        logger.info("La base contient déjà des données : seed ignoré")
        return False

    users = [
        User(email=email, first_name=first, last_name=last, role=role, google_id=google_id)
        for email, first, last, role, google_id in DEMO_USERS
    ]
    db.add_all(users)
    logger.info(f"{len(users)} utilisateurs créés")

    patients = [Patient(**data) for data in DEMO_PATIENTS]
    db.add_all(patients)
    db.flush()
    logger.info(f"{len(patients)} patients créés")

    # Un traitement pour chacun des trois premiers patients
    now = utcnow()
    for patient, (t_type, title, description, cost, final_status, days_ago) in zip(
            patients, DEMO_TREATMENTS):
        treatment = Treatment(
            patient_id=patient.id,
            type=t_type,
            title=title,
            description=description,
            estimated_cost=cost,
            start_date=now - timedelta(days=days_ago),
            status=TreatmentStatus.PLANNED,
        )
        if final_status in (TreatmentStatus.IN_PROGRESS, TreatmentStatus.COMPLETED):
            treatment.start()
            treatment.start_date = now - timedelta(days=days_ago)
        if final_status == TreatmentStatus.COMPLETED:
            treatment.complete(cost, "Treatment completed successfully")
        db.add(treatment)

    db.commit()
    logger.info(f"{len(DEMO_TREATMENTS)} traitements créés")
    return True


# =============================================================================
# 3. POINT D'ENTRÉE
# =============================================================================

def init_db(seed: bool = False) -> bool:
    """Crée les tables puis, si demandé, insère les données de démonstration."""
    if not check_database_connection():
        logger.error("Base de données injoignable : initialisation annulée")
        return False

    create_tables()
    if seed:
        with db_session() as db:
            seed_database(db)
    return True


if __name__ == "__main__":
    from dentaltrack.core.logging import configure_logging

    configure_logging()
    ok = init_db(seed="--seed" in sys.argv)
    sys.exit(0 if ok else 1)
