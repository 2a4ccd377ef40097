"""
DentalTrack - Application principale FastAPI
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dentaltrack.api.v1 import api_router
from dentaltrack.core.config import settings
from dentaltrack.core.exceptions import register_exception_handlers
from dentaltrack.core.logging import configure_logging
from dentaltrack.database.init_db import create_tables, seed_database
from dentaltrack.database.session import db_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Démarrage : logging, tables (hors production) et données de démo."""
    configure_logging()
    logger.info(f"Démarrage de {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    # En production, le schéma est géré par Alembic
    if settings.is_development:
        create_tables()
        if settings.SEED_DATABASE:
            with db_session() as db:
                seed_database(db)

    yield

    logger.info(f"Arrêt de {settings.APP_NAME}")


# Créer l'application FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    description="API de gestion de cabinet dentaire : patients, traitements, clichés et analyses",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mapping global exceptions → réponses HTTP
register_exception_handlers(app)

# Inclure les routes API v1
app.include_router(api_router)


@app.get("/")
async def root():
    """Page d'accueil - Health check"""
    return {
        "app": settings.APP_NAME,
        "status": "running",
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health")
async def health_check():
    """Endpoint de vérification de santé"""
    return {"status": "healthy"}
