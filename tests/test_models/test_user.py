"""
Tests unitaires pour le modèle User et les permissions par rôle.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dentaltrack.models import User
from dentaltrack.models.enums import UserRole


class TestUser:
    """Tests pour le modèle User."""

    def test_create_user_defaults(self, db_session: Session):
        user = User(email="new@dentaltrack.com", first_name="New", last_name="User")
        db_session.add(user)
        db_session.flush()

        assert user.role == UserRole.ASSISTANT
        assert user.is_active is True
        assert user.last_login_at is None

    def test_email_unique(self, db_session: Session, user_doctor: User):
        db_session.add(User(email=user_doctor.email, first_name="Dup", last_name="Licate"))
        with pytest.raises(IntegrityError):
            db_session.flush()
        db_session.rollback()

    def test_full_name(self, user_doctor: User):
        assert user_doctor.full_name == "John Smith"

    def test_update_profile(self, user_assistant: User):
        user_assistant.update_profile(" Janet ", "Wilson")
        assert user_assistant.first_name == "Janet"

    def test_update_profile_requires_names(self, user_assistant: User):
        with pytest.raises(ValueError):
            user_assistant.update_profile("", "Wilson")

    def test_record_login(self, user_doctor: User):
        user_doctor.record_login()
        assert user_doctor.last_login_at is not None
        assert user_doctor.last_login_at.tzinfo is not None

    def test_deactivate_and_activate(self, user_assistant: User):
        user_assistant.deactivate()
        assert user_assistant.is_active is False
        user_assistant.activate()
        assert user_assistant.is_active is True

    def test_update_role(self, user_assistant: User):
        user_assistant.update_role(UserRole.DOCTOR)
        assert user_assistant.has_permission("perform_treatments") is True


class TestPermissions:
    """Matrice rôle → permission."""

    @pytest.mark.parametrize("role,permission,expected", [
        (UserRole.DOCTOR, "manage_patients", True),
        (UserRole.DOCTOR, "view_reports", True),
        (UserRole.DOCTOR, "manage_users", False),
        (UserRole.DOCTOR, "perform_treatments", True),
        (UserRole.ASSISTANT, "manage_patients", False),
        (UserRole.ASSISTANT, "view_reports", False),
        (UserRole.ASSISTANT, "manage_users", False),
        (UserRole.ASSISTANT, "perform_treatments", False),
        (UserRole.ADMIN, "manage_patients", True),
        (UserRole.ADMIN, "view_reports", True),
        (UserRole.ADMIN, "manage_users", True),
        (UserRole.ADMIN, "perform_treatments", False),
    ])
    def test_has_permission(self, role, permission, expected):
        user = User(email="x@dentaltrack.com", first_name="X", last_name="Y", role=role)
        assert user.has_permission(permission) is expected

    def test_unknown_permission(self, user_admin: User):
        assert user_admin.has_permission("launch_rockets") is False
