"""
Tests unitaires pour le modèle Patient.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dentaltrack.models import Patient, Treatment
from dentaltrack.models.enums import TreatmentStatus, TreatmentType


class TestPatient:
    """Tests pour le modèle Patient."""

    def test_create_patient(self, db_session: Session):
        """Test création d'un patient."""
        patient = Patient(
            first_name="Carol",
            last_name="Brown",
            email="carol.brown@email.com",
            date_of_birth=date(1992, 11, 8),
        )
        db_session.add(patient)
        db_session.flush()

        assert patient.id is not None
        assert patient.is_active is True
        assert patient.created_at is not None
        assert patient.created_at.tzinfo is not None
        assert patient.updated_at is None

    def test_email_unique(self, db_session: Session, patient: Patient):
        """Deux patients ne peuvent pas partager un email."""
        db_session.add(Patient(
            first_name="Other",
            last_name="Person",
            email=patient.email,
            date_of_birth=date(2000, 1, 1),
        ))
        with pytest.raises(IntegrityError):
            db_session.flush()
        db_session.rollback()

    def test_full_name(self, patient: Patient):
        assert patient.full_name == "Alice Johnson"
        assert str(patient) == "Alice Johnson"

    def test_age_before_birthday(self, patient: Patient):
        """L'âge n'est incrémenté qu'après la date anniversaire."""
        today = date.today()
        patient.date_of_birth = date(today.year - 30, 12, 31)
        if (today.month, today.day) == (12, 31):
            assert patient.age == 30
        else:
            assert patient.age == 29

    def test_age_on_birthday(self, patient: Patient):
        today = date.today()
        patient.date_of_birth = date(today.year - 40, 1, 1)
        assert patient.age == 40

    def test_has_active_treatment(self, db_session: Session, patient: Patient, treatment: Treatment):
        """Seul un traitement IN_PROGRESS rend le patient 'actif'."""
        db_session.refresh(patient)
        assert patient.has_active_treatment is False

        treatment.start()
        db_session.commit()
        db_session.refresh(patient)
        assert patient.has_active_treatment is True

    def test_update_personal_info(self, patient: Patient):
        patient.update_personal_info(
            first_name="  Alicia ",
            last_name="Johnson-Smith",
            email="Alicia.JS@Email.com ",
            date_of_birth=date(1985, 3, 16),
            phone="+15559999",
        )
        assert patient.first_name == "Alicia"
        assert patient.last_name == "Johnson-Smith"
        assert patient.email == "alicia.js@email.com"
        assert patient.phone == "+15559999"
        assert patient.address is None

    @pytest.mark.parametrize("first_name,last_name", [("", "Doe"), ("John", "   ")])
    def test_update_personal_info_requires_names(self, patient: Patient, first_name, last_name):
        with pytest.raises(ValueError):
            patient.update_personal_info(
                first_name=first_name,
                last_name=last_name,
                email="x@email.com",
                date_of_birth=date(1990, 1, 1),
            )

    def test_update_personal_info_rejects_future_birth_date(self, patient: Patient):
        with pytest.raises(ValueError, match="passé"):
            patient.update_personal_info(
                first_name="Alice",
                last_name="Johnson",
                email=patient.email,
                date_of_birth=date.today() + timedelta(days=1),
            )

    def test_update_medical_info(self, patient: Patient):
        patient.update_medical_info("Diabetes Type 2", "Latex")
        assert patient.medical_history == "Diabetes Type 2"
        assert patient.allergies == "Latex"

    def test_deactivate_and_activate(self, db_session: Session, patient: Patient):
        """Suppression logique puis réactivation."""
        patient.deactivate()
        db_session.commit()
        assert patient.is_active is False
        assert patient.updated_at is not None

        patient.activate()
        assert patient.is_active is True

    def test_delete_cascades_treatments(self, db_session: Session, patient: Patient):
        """La suppression physique d'un patient supprime ses traitements."""
        db_session.add(Treatment(
            patient_id=patient.id,
            type=TreatmentType.CLEANING,
            title="Cleaning",
            status=TreatmentStatus.PLANNED,
        ))
        db_session.commit()
        db_session.refresh(patient)
        assert len(patient.treatments) == 1

        db_session.delete(patient)
        db_session.commit()
        assert db_session.query(Treatment).count() == 0
