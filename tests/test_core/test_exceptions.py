"""
Tests du mapping exceptions métier → réponses HTTP.
"""

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from pydantic import BaseModel

from dentaltrack.core.exceptions import (
    ConflictError,
    DentalTrackError,
    DomainValidationError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
    error_body,
    register_exception_handlers,
)


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    class Item(BaseModel):
        quantity: int

    @app.get("/raise/{kind}")
    def raise_error(kind: str):
        errors = {
            "not_found": NotFoundError("Introuvable"),
            "validation": DomainValidationError("Invalide", details=["champ: erreur"]),
            "operation": InvalidOperationError("Interdit"),
            "conflict": ConflictError("Doublon"),
            "unauthorized": UnauthorizedError("Qui êtes-vous ?"),
            "forbidden": ForbiddenError("Non"),
        }
        raise errors[kind]

    @app.post("/items")
    def create_item(item: Item):
        return item

    return app


@pytest.fixture
def error_client():
    with TestClient(build_app()) as test_client:
        yield test_client


class TestExceptionHandlers:

    @pytest.mark.parametrize("kind,expected", [
        ("not_found", status.HTTP_404_NOT_FOUND),
        ("validation", status.HTTP_400_BAD_REQUEST),
        ("operation", status.HTTP_400_BAD_REQUEST),
        ("conflict", status.HTTP_409_CONFLICT),
        ("unauthorized", status.HTTP_401_UNAUTHORIZED),
        ("forbidden", status.HTTP_403_FORBIDDEN),
    ])
    def test_status_mapping(self, error_client: TestClient, kind, expected):
        response = error_client.get(f"/raise/{kind}")

        assert response.status_code == expected
        assert response.json()["status_code"] == expected

    def test_details_are_forwarded(self, error_client: TestClient):
        body = error_client.get("/raise/validation").json()
        assert body["message"] == "Invalide"
        assert body["details"] == ["champ: erreur"]

    def test_request_validation_is_400(self, error_client: TestClient):
        response = error_client.post("/items", json={"quantity": "many"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["message"] == "Validation échouée"
        assert body["details"][0].startswith("body.quantity:")


class TestErrorBody:

    def test_error_body(self):
        body = error_body(404, "Introuvable")
        assert body["status_code"] == 404
        assert body["details"] is None
        assert body["timestamp"].endswith("+00:00")

    def test_base_error_defaults_to_400(self):
        assert DentalTrackError("x").status_code == status.HTTP_400_BAD_REQUEST
