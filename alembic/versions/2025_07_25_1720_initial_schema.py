"""initial_schema

Revision ID: 3b7d2c91a4e0
Revises:
Create Date: 2025-07-25 17:20:20.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3b7d2c91a4e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# =============================================================================
# ENUMS
# =============================================================================

user_role_enum = sa.Enum('DOCTOR', 'ASSISTANT', 'ADMIN', name='user_role_enum', create_constraint=True)

treatment_type_enum = sa.Enum(
    'CONSULTATION', 'CLEANING', 'FILLING', 'ROOT_CANAL', 'CROWN', 'BRIDGE', 'IMPLANT',
    'EXTRACTION', 'ORTHODONTICS', 'WHITENING', 'PERIODONTAL', 'ORAL_SURGERY', 'EMERGENCY', 'OTHER',
    name='treatment_type_enum', create_constraint=True,
)

treatment_status_enum = sa.Enum(
    'PLANNED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', 'ON_HOLD',
    name='treatment_status_enum', create_constraint=True,
)

photo_type_enum = sa.Enum(
    'INTRAORAL', 'EXTRAORAL', 'XRAY', 'PANORAMIC', 'BITEWING', 'PERIAPICAL',
    'PROGRESS', 'BEFORE', 'AFTER', 'CLINICAL', 'OTHER',
    name='photo_type_enum', create_constraint=True,
)

photo_quality_enum = sa.Enum(
    'PENDING', 'LOW', 'MEDIUM', 'HIGH', 'EXCELLENT',
    name='photo_quality_enum', create_constraint=True,
)

analysis_type_enum = sa.Enum(
    'CARIES_DETECTION', 'PLAQUE_ANALYSIS', 'GUM_HEALTH_ASSESSMENT', 'TOOTH_ALIGNMENT',
    'COLOR_MATCHING', 'QUALITY_ASSESSMENT', 'PROGRESS_COMPARISON', 'ANOMALY_DETECTION',
    'TREATMENT_PLANNING', 'RISK_ASSESSMENT', 'OTHER',
    name='analysis_type_enum', create_constraint=True,
)

analysis_status_enum = sa.Enum(
    'PENDING', 'PROCESSING', 'COMPLETED', 'FAILED', 'CANCELLED',
    name='analysis_status_enum', create_constraint=True,
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # === users ===
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Email unique'),
        sa.Column('google_id', sa.String(length=100), nullable=True, comment='Identifiant Google OAuth'),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', user_role_enum, nullable=False, comment='Rôle applicatif'),
        sa.Column('is_active', sa.Boolean(), nullable=False, comment='Compte actif'),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('google_id'),
        comment='Utilisateurs du cabinet',
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # === patients ===
    op.create_table(
        'patients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, comment='Prénom'),
        sa.Column('last_name', sa.String(length=100), nullable=False, comment='Nom de famille'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Email unique'),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=False, comment='Date de naissance'),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('emergency_contact', sa.String(length=100), nullable=True),
        sa.Column('emergency_phone', sa.String(length=20), nullable=True),
        sa.Column('medical_history', sa.Text(), nullable=True),
        sa.Column('allergies', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        comment='Dossiers patients',
    )
    op.create_index('ix_patients_email', 'patients', ['email'], unique=True)
    op.create_index('ix_patients_is_active', 'patients', ['is_active'])
    op.create_index('ix_patients_name', 'patients', ['first_name', 'last_name'])

    # === treatments ===
    op.create_table(
        'treatments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=False, comment='Patient concerné'),
        sa.Column('type', treatment_type_enum, nullable=False, comment="Type d'acte"),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', treatment_status_enum, nullable=False, comment='Statut du traitement'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('estimated_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        comment='Traitements dentaires',
    )
    op.create_index('ix_treatments_patient_id', 'treatments', ['patient_id'])
    op.create_index('ix_treatments_status', 'treatments', ['status'])
    op.create_index('ix_treatments_start_date', 'treatments', ['start_date'])

    # === photos ===
    op.create_table(
        'photos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('treatment_id', sa.Uuid(), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('content_type', sa.String(length=100), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False, comment='Taille en octets'),
        sa.Column('type', photo_type_enum, nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('tooth_number', sa.Integer(), nullable=True, comment='Numéro de dent (1-32)'),
        sa.Column('quality', photo_quality_enum, nullable=False),
        sa.Column('is_processed', sa.Boolean(), nullable=False),
        sa.Column(
            'image_metadata',
            sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'),
            nullable=True,
            comment='Métadonnées EXIF',
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(['treatment_id'], ['treatments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        comment='Clichés dentaires',
    )
    op.create_index('ix_photos_treatment_id', 'photos', ['treatment_id'])
    op.create_index('ix_photos_type', 'photos', ['type'])
    op.create_index('ix_photos_quality', 'photos', ['quality'])

    # === analyses ===
    op.create_table(
        'analyses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('photo_id', sa.Uuid(), nullable=False),
        sa.Column('type', analysis_type_enum, nullable=False),
        sa.Column('status', analysis_status_enum, nullable=False),
        sa.Column('results', sa.Text(), nullable=True),
        sa.Column('confidence_score', sa.Numeric(precision=5, scale=4), nullable=True),
        sa.Column('findings', sa.Text(), nullable=True),
        sa.Column('recommendations', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('error_message', sa.String(length=1000), nullable=True),
        sa.Column('processing_time_ms', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        comment='Analyses de clichés',
    )
    op.create_index('ix_analyses_photo_id', 'analyses', ['photo_id'])
    op.create_index('ix_analyses_status', 'analyses', ['status'])


def downgrade() -> None:
    op.drop_table('analyses')
    op.drop_table('photos')
    op.drop_table('treatments')
    op.drop_table('patients')
    op.drop_table('users')

    bind = op.get_bind()
    for enum in (
        analysis_status_enum, analysis_type_enum, photo_quality_enum, photo_type_enum,
        treatment_status_enum, treatment_type_enum, user_role_enum,
    ):
        enum.drop(bind, checkfirst=True)
