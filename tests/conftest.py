"""
Fixtures pytest partagées pour les tests DentalTrack.

Ce module fournit :
- Une base de données SQLite en mémoire pour les tests (rapide, isolée)
- Des fixtures pour créer des objets de test (User, Patient, Treatment, Photo, Analysis)
- Des clients HTTP avec authentification mockée, un par rôle

Les variables d'environnement sont positionnées avant tout import de
dentaltrack : les settings sont chargés une seule fois à l'import.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date, timedelta
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from dentaltrack.core.auth.user_auth import get_current_user
from dentaltrack.core.security.jwt import create_user_token
from dentaltrack.database.base_class import Base
from dentaltrack.database.session import get_db
from dentaltrack.main import app
from dentaltrack.models import (
    User,
    Patient,
    Treatment,
    Photo,
    Analysis,
)
from dentaltrack.models.enums import (
    UserRole,
    TreatmentType,
    TreatmentStatus,
    PhotoType,
    PhotoQuality,
    AnalysisType,
    AnalysisStatus,
)
from dentaltrack.models.types import utcnow


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def engine():
    """
    Crée un engine SQLite en mémoire pour les tests.

    StaticPool : une seule connexion partagée entre le thread du test
    et celui du TestClient.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Session de test.

    Les services committent eux-mêmes : la base est recréée à chaque test.
    """
    session = Session(bind=engine, expire_on_commit=False)
    yield session
    session.close()


# =============================================================================
# USER FIXTURES
# =============================================================================

def make_user(db_session: Session, email: str, role: UserRole, **kwargs) -> User:
    user = User(
        email=email,
        first_name=kwargs.pop("first_name", "Test"),
        last_name=kwargs.pop("last_name", role.value.capitalize()),
        role=role,
        **kwargs,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def user_doctor(db_session: Session) -> User:
    """Praticien : gère les patients et réalise les traitements."""
    return make_user(db_session, "dr.smith@dentaltrack.com", UserRole.DOCTOR,
                     first_name="John", last_name="Smith", google_id="google_123456")


@pytest.fixture
def user_assistant(db_session: Session) -> User:
    """Assistant(e) : consultation et saisie uniquement."""
    return make_user(db_session, "assistant@dentaltrack.com", UserRole.ASSISTANT,
                     first_name="Jane", last_name="Wilson")


@pytest.fixture
def user_admin(db_session: Session) -> User:
    """Administrateur : gestion des comptes."""
    return make_user(db_session, "admin@dentaltrack.com", UserRole.ADMIN,
                     first_name="Mike", last_name="Johnson")


# =============================================================================
# DOMAIN FIXTURES
# =============================================================================

@pytest.fixture
def patient(db_session: Session) -> Patient:
    patient = Patient(
        first_name="Alice",
        last_name="Johnson",
        email="alice.johnson@email.com",
        phone="+15550101",
        date_of_birth=date(1985, 3, 15),
        gender="Female",
        allergies="None known",
    )
    db_session.add(patient)
    db_session.commit()
    return patient


@pytest.fixture
def patient_bob(db_session: Session) -> Patient:
    patient = Patient(
        first_name="Bob",
        last_name="Williams",
        email="bob.williams@email.com",
        phone="+15550201",
        date_of_birth=date(1978, 7, 22),
        allergies="Penicillin",
    )
    db_session.add(patient)
    db_session.commit()
    return patient


@pytest.fixture
def treatment(db_session: Session, patient: Patient) -> Treatment:
    """Traitement planifié dans 3 jours."""
    treatment = Treatment(
        patient_id=patient.id,
        type=TreatmentType.ROOT_CANAL,
        title="Root Canal Therapy",
        description="Endodontic treatment",
        estimated_cost=Decimal("1200.00"),
        start_date=utcnow() + timedelta(days=3),
        status=TreatmentStatus.PLANNED,
    )
    db_session.add(treatment)
    db_session.commit()
    return treatment


@pytest.fixture
def treatment_in_progress(db_session: Session, patient: Patient) -> Treatment:
    treatment = Treatment(
        patient_id=patient.id,
        type=TreatmentType.FILLING,
        title="Composite Filling",
        estimated_cost=Decimal("300.00"),
        start_date=utcnow() - timedelta(days=2),
        status=TreatmentStatus.IN_PROGRESS,
    )
    db_session.add(treatment)
    db_session.commit()
    return treatment


@pytest.fixture
def photo(db_session: Session, treatment: Treatment) -> Photo:
    photo = Photo(
        treatment_id=treatment.id,
        file_name="tooth_14.JPG",
        file_path="/uploads/2025/tooth_14.jpg",
        content_type="image/jpeg",
        file_size=2_500_000,
        type=PhotoType.INTRAORAL,
        tooth_number=14,
        quality=PhotoQuality.PENDING,
        is_processed=False,
        image_metadata={"width": 4000, "height": 3000, "camera_model": "EOS R5"},
    )
    db_session.add(photo)
    db_session.commit()
    return photo


@pytest.fixture
def analysis(db_session: Session, photo: Photo) -> Analysis:
    analysis = Analysis(
        photo_id=photo.id,
        type=AnalysisType.CARIES_DETECTION,
        status=AnalysisStatus.PENDING,
    )
    db_session.add(analysis)
    db_session.commit()
    return analysis


# =============================================================================
# CLIENT FIXTURES - Authentification mockée
# =============================================================================

def _client_for(db_session: Session, user: User | None) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    if user is not None:
        async def override_get_current_user():
            return user

        app.dependency_overrides[get_current_user] = override_get_current_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(db_session: Session, user_doctor: User) -> Generator[TestClient, None, None]:
    """Client authentifié en tant que praticien."""
    yield from _client_for(db_session, user_doctor)


@pytest.fixture
def client_as_assistant(db_session: Session, user_assistant: User) -> Generator[TestClient, None, None]:
    yield from _client_for(db_session, user_assistant)


@pytest.fixture
def client_as_admin(db_session: Session, user_admin: User) -> Generator[TestClient, None, None]:
    yield from _client_for(db_session, user_admin)


@pytest.fixture
def unauthenticated_client(db_session: Session) -> Generator[TestClient, None, None]:
    """Client sans override d'authentification : le vrai JWT est vérifié."""
    yield from _client_for(db_session, None)


@pytest.fixture
def doctor_token(user_doctor: User) -> str:
    return create_user_token(user_doctor)
