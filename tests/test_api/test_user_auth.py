"""
Tests API pour l'authentification et l'administration des comptes.

Ce module teste :
- La vérification réelle du JWT (sans override de get_current_user)
- /api/v1/auth/me : Profil courant
- /api/v1/users : Gestion des comptes (ADMIN uniquement)
"""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import Session

from dentaltrack.core.config import settings
from dentaltrack.core.security.jwt import create_access_token, create_user_token
from dentaltrack.models import Patient, User


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# AUTHENTIFICATION JWT
# =============================================================================

class TestJWTAuthentication:

    def test_missing_token(self, unauthenticated_client: TestClient):
        response = unauthenticated_client.get("/api/v1/patients")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Token d'authentification requis"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_valid_token(self, unauthenticated_client: TestClient, doctor_token: str, patient: Patient):
        response = unauthenticated_client.get("/api/v1/patients", headers=bearer(doctor_token))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1

    def test_garbage_token(self, unauthenticated_client: TestClient):
        response = unauthenticated_client.get("/api/v1/patients", headers=bearer("not.a.jwt"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"].startswith("Token invalide")

    def test_expired_token(self, unauthenticated_client: TestClient, user_doctor: User):
        token = create_user_token(user_doctor, expires_delta=timedelta(seconds=-10))
        response = unauthenticated_client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_signature(self, unauthenticated_client: TestClient, user_doctor: User):
        token = jwt.encode(
            {"sub": str(user_doctor.id), "type": "access", "iss": settings.TOKEN_ISSUER},
            "another-secret",
            algorithm="HS256",
        )
        response = unauthenticated_client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_without_subject(self, unauthenticated_client: TestClient):
        token = create_access_token({"email": "ghost@dentaltrack.com"})
        response = unauthenticated_client.get("/api/v1/auth/me", headers=bearer(token))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_user(self, unauthenticated_client: TestClient):
        token = create_access_token({"sub": "00000000-0000-0000-0000-000000000000"})
        response = unauthenticated_client.get("/api/v1/auth/me", headers=bearer(token))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Utilisateur non trouvé"

    def test_inactive_user(
            self, unauthenticated_client: TestClient, db_session: Session, user_doctor: User, doctor_token: str
    ):
        user_doctor.deactivate()
        db_session.commit()

        response = unauthenticated_client.get("/api/v1/auth/me", headers=bearer(doctor_token))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_permission_with_real_token(self, unauthenticated_client: TestClient, user_assistant: User):
        response = unauthenticated_client.get(
            "/api/v1/users", headers=bearer(create_user_token(user_assistant))
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# PROFIL COURANT
# =============================================================================

class TestCurrentUser:

    def test_me(self, client: TestClient, user_doctor: User):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["email"] == user_doctor.email
        assert data["role"] == "DOCTOR"
        assert data["role_display_name"] == "Doctor"
        assert set(data["permissions"]) == {"manage_patients", "view_reports", "perform_treatments"}

    def test_update_me(self, client_as_assistant: TestClient):
        response = client_as_assistant.put(
            "/api/v1/auth/me", json={"first_name": "Janet", "last_name": "Wilson"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["full_name"] == "Janet Wilson"
        assert response.json()["permissions"] == []

    def test_update_me_blank_name(self, client: TestClient):
        response = client.put("/api/v1/auth/me", json={"first_name": "  ", "last_name": "Smith"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# ADMINISTRATION DES COMPTES
# =============================================================================

class TestUserAdministration:

    def test_list_users(self, client_as_admin: TestClient, user_doctor: User, user_assistant: User):
        data = client_as_admin.get("/api/v1/users").json()

        assert data["total"] == 3
        assert client_as_admin.get("/api/v1/users", params={"role": "DOCTOR"}).json()["total"] == 1

    def test_doctor_cannot_manage_users(self, client: TestClient):
        response = client.get("/api/v1/users")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Permission requise: manage_users"

    def test_create_user(self, client_as_admin: TestClient):
        response = client_as_admin.post(
            "/api/v1/users",
            json={"email": "Dr.Jones@DentalTrack.com", "first_name": "Sarah", "last_name": "Jones",
                  "role": "doctor"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["email"] == "dr.jones@dentaltrack.com"
        assert response.json()["role"] == "DOCTOR"

    def test_create_user_duplicate_email(self, client_as_admin: TestClient, user_doctor: User):
        response = client_as_admin.post(
            "/api/v1/users",
            json={"email": user_doctor.email.upper(), "first_name": "X", "last_name": "Y"},
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_user_duplicate_google_id(self, client_as_admin: TestClient, user_doctor: User):
        response = client_as_admin.post(
            "/api/v1/users",
            json={
                "email": "new.doctor@dentaltrack.com",
                "google_id": user_doctor.google_id,
                "first_name": "New",
                "last_name": "Doctor",
            },
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "existe déjà" in response.json()["message"]

    def test_update_role(self, client_as_admin: TestClient, user_assistant: User):
        response = client_as_admin.patch(f"/api/v1/users/{user_assistant.id}/role", json={"role": "DOCTOR"})

        assert response.status_code == status.HTTP_200_OK
        assert "perform_treatments" in response.json()["permissions"]

    def test_deactivate_and_activate(self, client_as_admin: TestClient, user_assistant: User):
        response = client_as_admin.post(f"/api/v1/users/{user_assistant.id}/deactivate")
        assert response.json()["is_active"] is False

        response = client_as_admin.post(f"/api/v1/users/{user_assistant.id}/activate")
        assert response.json()["is_active"] is True

    def test_cannot_deactivate_self(self, client_as_admin: TestClient, user_admin: User):
        response = client_as_admin.post(f"/api/v1/users/{user_admin.id}/deactivate")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert user_admin.is_active is True

    def test_get_unknown_user(self, client_as_admin: TestClient):
        response = client_as_admin.get("/api/v1/users/00000000-0000-0000-0000-000000000000")
        assert response.status_code == status.HTTP_404_NOT_FOUND
