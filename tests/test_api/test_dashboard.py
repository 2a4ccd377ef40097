"""
Tests API pour le tableau de bord (/api/v1/dashboard/stats).
"""

from datetime import timedelta
from decimal import Decimal

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from dentaltrack.models import Analysis, Patient, Photo, Treatment
from dentaltrack.models.enums import AnalysisStatus, AnalysisType, TreatmentStatus, TreatmentType
from dentaltrack.models.types import utcnow


URL = "/api/v1/dashboard/stats"


class TestDashboard:

    def test_empty_database(self, client: TestClient):
        response = client.get(URL)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["patients"] == {"total": 0, "active": 0}
        assert data["treatments"]["total"] == 0
        assert data["treatments"]["by_status"] == {
            "PLANNED": 0, "IN_PROGRESS": 0, "COMPLETED": 0, "CANCELLED": 0, "ON_HOLD": 0,
        }
        assert data["photos"]["total_size_bytes"] == 0
        assert data["analyses"]["average_processing_time_ms"] is None

    def test_counters(
            self,
            client: TestClient,
            db_session: Session,
            patient: Patient,
            patient_bob: Patient,
            treatment: Treatment,
            treatment_in_progress: Treatment,
            photo: Photo,
            analysis: Analysis,
    ):
        patient_bob.deactivate()
        completed = Treatment(
            patient_id=patient_bob.id,
            type=TreatmentType.CLEANING,
            title="Cleaning",
            status=TreatmentStatus.COMPLETED,
            start_date=utcnow() - timedelta(hours=2),
            end_date=utcnow() - timedelta(hours=1),
        )
        db_session.add(completed)
        db_session.add(Analysis(
            photo_id=photo.id,
            type=AnalysisType.RISK_ASSESSMENT,
            status=AnalysisStatus.COMPLETED,
            results="Low risk",
            confidence_score=Decimal("0.9"),
            processing_time_ms=1000,
        ))
        db_session.add(Analysis(
            photo_id=photo.id,
            type=AnalysisType.RISK_ASSESSMENT,
            status=AnalysisStatus.COMPLETED,
            results="Low risk",
            confidence_score=Decimal("0.5"),
            processing_time_ms=3000,
        ))
        db_session.commit()

        data = client.get(URL).json()

        assert data["patients"] == {"total": 2, "active": 1}

        treatments = data["treatments"]
        assert treatments["total"] == 3
        assert treatments["by_status"]["PLANNED"] == 1
        assert treatments["active"] == 1
        # Planifié dans 3 jours : dans la fenêtre de 7 jours
        assert treatments["upcoming"] == 1
        assert treatments["completed_this_month"] >= 0

        assert data["photos"] == {
            "total": 1,
            "total_size_bytes": 2_500_000,
            "requiring_review": 1,
            "unprocessed": 1,
        }

        analyses = data["analyses"]
        assert analyses["total"] == 3
        assert analyses["pending"] == 1
        assert analyses["failed"] == 0
        assert analyses["high_confidence"] == 1
        assert analyses["average_processing_time_ms"] == 2000.0

    def test_upcoming_excludes_far_future(
            self, client: TestClient, db_session: Session, treatment: Treatment
    ):
        treatment.start_date = utcnow() + timedelta(days=30)
        db_session.commit()

        assert client.get(URL).json()["treatments"]["upcoming"] == 0

    def test_requires_authentication(self, unauthenticated_client: TestClient):
        response = unauthenticated_client.get(URL)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
