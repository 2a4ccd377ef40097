"""
Tests API pour le module Analysis.

Ce module teste les endpoints :
- /api/v1/photos/{id}/analyses : Demande et liste par cliché
- /api/v1/analyses : Liste filtrée et détail
- /api/v1/analyses/{id}/start|complete|fail|retry|cancel : Cycle de vie
"""

from decimal import Decimal

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from dentaltrack.models import Analysis, Photo
from dentaltrack.models.enums import AnalysisStatus, AnalysisType


BASE_URL = "/api/v1/analyses"
MISSING_ID = "00000000-0000-0000-0000-000000000000"


class TestCreateAnalysis:

    def test_request_analysis(self, client: TestClient, photo: Photo):
        response = client.post(f"/api/v1/photos/{photo.id}/analyses", json={"type": "plaque analysis"})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["type"] == "PLAQUE_ANALYSIS"
        assert data["status"] == "PENDING"
        assert data["is_ai_based"] is True
        assert data["has_high_confidence"] is False
        assert data["type_description"] == "Analysis of plaque buildup and distribution"

    def test_unknown_photo(self, client: TestClient):
        response = client.post(f"/api/v1/photos/{MISSING_ID}/analyses", json={"type": "OTHER"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_type(self, client: TestClient, photo: Photo):
        response = client.post(f"/api/v1/photos/{photo.id}/analyses", json={"type": "HOROSCOPE"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_photo_analyses(self, client: TestClient, photo: Photo, analysis: Analysis):
        response = client.get(f"/api/v1/photos/{photo.id}/analyses")

        assert response.status_code == status.HTTP_200_OK
        assert [a["id"] for a in response.json()] == [str(analysis.id)]


class TestListAnalyses:

    def test_filters(self, client: TestClient, db_session: Session, photo: Photo, analysis: Analysis):
        db_session.add(Analysis(
            photo_id=photo.id,
            type=AnalysisType.GUM_HEALTH_ASSESSMENT,
            status=AnalysisStatus.COMPLETED,
            results="Healthy",
            confidence_score=Decimal("0.95"),
        ))
        db_session.commit()

        assert client.get(BASE_URL).json()["total"] == 2
        assert client.get(BASE_URL, params={"status": "PENDING"}).json()["total"] == 1
        assert client.get(BASE_URL, params={"type": "GUM_HEALTH_ASSESSMENT"}).json()["total"] == 1
        assert client.get(BASE_URL, params={"min_confidence": "0.9"}).json()["total"] == 1
        assert client.get(BASE_URL, params={"photo_id": str(photo.id)}).json()["total"] == 2

    def test_min_confidence_out_of_range(self, client: TestClient):
        response = client.get(BASE_URL, params={"min_confidence": "1.5"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_analysis_not_found(self, client: TestClient):
        assert client.get(f"{BASE_URL}/{MISSING_ID}").status_code == status.HTTP_404_NOT_FOUND


class TestAnalysisWorkflow:

    def test_complete_flow(self, client: TestClient, analysis: Analysis):
        response = client.post(f"{BASE_URL}/{analysis.id}/start")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "PROCESSING"

        response = client.post(
            f"{BASE_URL}/{analysis.id}/complete",
            json={
                "results": '{"caries": [{"tooth": 14}]}',
                "confidence_score": "0.87",
                "findings": "Early caries on 14",
                "recommendations": "Composite filling",
                "processing_time_ms": 1200,
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["status_display_name"] == "Completed"
        assert data["completed_at"] is not None
        assert data["has_high_confidence"] is True
        assert Decimal(data["confidence_score"]) == Decimal("0.87")

    def test_complete_pending_refused(self, client: TestClient, analysis: Analysis):
        response = client.post(f"{BASE_URL}/{analysis.id}/complete", json={"results": "ok"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "PENDING" in response.json()["message"]

    def test_complete_confidence_out_of_range(self, client: TestClient, analysis: Analysis):
        client.post(f"{BASE_URL}/{analysis.id}/start")
        response = client.post(
            f"{BASE_URL}/{analysis.id}/complete", json={"results": "ok", "confidence_score": 1.2}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_fail_and_retry(self, client: TestClient, analysis: Analysis):
        client.post(f"{BASE_URL}/{analysis.id}/start")

        response = client.post(
            f"{BASE_URL}/{analysis.id}/fail", json={"error_message": "Model timeout"}
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "FAILED"
        assert response.json()["error_message"] == "Model timeout"

        response = client.post(f"{BASE_URL}/{analysis.id}/retry")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "PENDING"
        assert response.json()["error_message"] is None

    def test_retry_pending_refused(self, client: TestClient, analysis: Analysis):
        response = client.post(f"{BASE_URL}/{analysis.id}/retry")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancel(self, client_as_assistant: TestClient, analysis: Analysis):
        response = client_as_assistant.post(f"{BASE_URL}/{analysis.id}/cancel")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "CANCELLED"

    def test_cancel_finished_refused(self, client: TestClient, analysis: Analysis):
        client.post(f"{BASE_URL}/{analysis.id}/cancel")
        response = client.post(f"{BASE_URL}/{analysis.id}/cancel")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
