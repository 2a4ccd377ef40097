"""
Alembic Environment Configuration - DentalTrack

Ce fichier configure Alembic pour :
1. Charger l'URL de la base depuis dentaltrack/core/config (qui lit le .env)
2. Importer tous les modèles SQLAlchemy pour la détection automatique
3. Supporter les migrations online (base connectée) et offline (génération SQL)
"""

from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy import create_engine

from alembic import context

from dentaltrack.core.config import settings

# Cet import charge tous les modèles pour que Alembic
# puisse détecter les tables à créer/modifier
from dentaltrack.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """Retourne l'URL de la base de données depuis les settings."""
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """
    Exécute les migrations en mode 'offline' (génération du SQL).

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=get_url().startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Exécute les migrations en mode 'online'.

    Usage:
        alembic upgrade head
    """
    connectable = create_engine(
        get_url(),
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite ne supporte pas ALTER TABLE complet
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
