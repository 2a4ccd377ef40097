"""
Tests unitaires pour le modèle Treatment et son cycle de vie.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from dentaltrack.models import Patient, Treatment
from dentaltrack.models.enums import TreatmentStatus, TreatmentType
from dentaltrack.models.types import utcnow


class TestTreatment:
    """Tests pour le modèle Treatment."""

    def test_create_treatment_defaults(self, db_session: Session, patient: Patient):
        treatment = Treatment(
            patient_id=patient.id,
            type=TreatmentType.CONSULTATION,
            title="Initial consultation",
        )
        db_session.add(treatment)
        db_session.flush()

        assert treatment.status == TreatmentStatus.PLANNED
        assert treatment.start_date is not None
        assert treatment.end_date is None
        assert treatment.patient == patient

    def test_costs_keep_two_decimals(self, db_session: Session, treatment: Treatment):
        db_session.expire(treatment)
        assert treatment.estimated_cost == Decimal("1200.00")

    def test_start_date_is_timezone_aware(self, db_session: Session, treatment: Treatment):
        """Les dates relues depuis SQLite restent en UTC."""
        db_session.expire(treatment)
        assert treatment.start_date.tzinfo is not None

    def test_is_deletable(self, treatment: Treatment):
        assert treatment.is_deletable is True
        treatment.start()
        assert treatment.is_deletable is False
        treatment.cancel("Patient request")
        assert treatment.is_deletable is True


class TestTreatmentWorkflow:
    """Transitions PLANNED → IN_PROGRESS → COMPLETED / CANCELLED."""

    def test_start(self, treatment: Treatment):
        before = utcnow()
        treatment.start()

        assert treatment.status == TreatmentStatus.IN_PROGRESS
        assert treatment.is_active is True
        assert treatment.start_date >= before

    def test_start_requires_planned(self, treatment_in_progress: Treatment):
        with pytest.raises(ValueError, match="planifié"):
            treatment_in_progress.start()

    def test_complete(self, treatment_in_progress: Treatment):
        treatment_in_progress.complete(Decimal("320.50"), "Done")

        assert treatment_in_progress.status == TreatmentStatus.COMPLETED
        assert treatment_in_progress.is_completed is True
        assert treatment_in_progress.end_date is not None
        assert treatment_in_progress.actual_cost == Decimal("320.50")
        assert treatment_in_progress.notes == "Done"

    def test_complete_requires_in_progress(self, treatment: Treatment):
        with pytest.raises(ValueError, match="en cours"):
            treatment.complete()

    def test_cancel_planned(self, treatment: Treatment):
        treatment.cancel("Patient moved away")
        assert treatment.status == TreatmentStatus.CANCELLED
        assert treatment.notes == "Patient moved away"

    def test_cancel_in_progress(self, treatment_in_progress: Treatment):
        treatment_in_progress.cancel()
        assert treatment_in_progress.status == TreatmentStatus.CANCELLED

    def test_cannot_cancel_completed(self, treatment_in_progress: Treatment):
        treatment_in_progress.complete()
        with pytest.raises(ValueError, match="terminé"):
            treatment_in_progress.cancel()
        assert treatment_in_progress.status == TreatmentStatus.COMPLETED

    def test_update_details(self, treatment: Treatment):
        treatment.update_details("  Root canal #14 ", "Molar", Decimal("999.99"))
        assert treatment.title == "Root canal #14"
        assert treatment.description == "Molar"
        assert treatment.estimated_cost == Decimal("999.99")

    def test_update_details_requires_title(self, treatment: Treatment):
        with pytest.raises(ValueError):
            treatment.update_details("   ")


class TestTreatmentDuration:

    def test_planned_has_no_duration(self, treatment: Treatment):
        assert treatment.duration is None

    def test_in_progress_duration_runs_until_now(self, treatment_in_progress: Treatment):
        assert treatment_in_progress.duration >= timedelta(days=2)

    def test_completed_duration(self, treatment_in_progress: Treatment):
        treatment_in_progress.start_date = utcnow() - timedelta(days=10)
        treatment_in_progress.complete()
        treatment_in_progress.end_date = treatment_in_progress.start_date + timedelta(days=4)

        assert treatment_in_progress.duration == timedelta(days=4)
