"""
Configuration de la session SQLAlchemy
Fournit l'engine, la factory de sessions, et la dependency FastAPI
"""
from typing import Generator, Optional
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from dentaltrack.core.config import settings

logger = logging.getLogger(__name__)


# === 1. ENGINE ===

def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Crée un engine adapté au dialecte de l'URL.

    - SQLite : check_same_thread désactivé (FastAPI utilise un threadpool)
      et clés étrangères activées à chaque connexion.
    - PostgreSQL : pool de connexions avec pre-ping et recyclage.
    """
    if database_url.startswith("sqlite"):
        sqlite_engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_engine(
        database_url,
        pool_size=5,              # Nombre de connexions permanentes
        max_overflow=10,          # Connexions supplémentaires si besoin
        pool_timeout=30,
        pool_recycle=1800,        # Recycler les connexions après 30 min
        pool_pre_ping=True,
        echo=echo,
        connect_args={"application_name": "dentaltrack"},
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


# === 2. SESSION LOCAL (Factory de sessions) ===

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,         # On contrôle explicitement les commits
    autoflush=False,
    expire_on_commit=False,   # Garder les objets accessibles après commit
)


# === 3. DEPENDENCY FASTAPI ===

def get_db() -> Generator[Session, None, None]:
    """
    Fournit une session par requête, fermée en fin de requête.

    Usage:
        @router.get("/patients")
        def list_patients(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


class db_session:
    """
    Context manager pour utiliser une session hors FastAPI (scripts, seed).

    Gère automatiquement le commit/rollback et la fermeture.

    Usage:
        with db_session() as db:
            db.add(patient)
            # Commit automatique si pas d'erreur
    """

    def __init__(self, commit_on_exit: bool = True):
        self.db: Optional[Session] = None
        self.commit_on_exit = commit_on_exit

    def __enter__(self) -> Session:
        self.db = SessionLocal()
        return self.db

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None and self.commit_on_exit:
                self.db.commit()
            else:
                self.db.rollback()
        finally:
            self.db.close()

        # Ne pas supprimer l'exception
        return False


# === 4. VÉRIFICATION DE CONNEXION ===

def check_database_connection(bind: Optional[Engine] = None) -> bool:
    """
    Vérifie que la connexion à la base de données fonctionne.

    Utilisé par le health check /health/ready.

    Returns:
        True si la connexion est OK, False sinon
    """
    try:
        with (bind or engine).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Erreur de connexion à la base de données : {e}")
        return False
