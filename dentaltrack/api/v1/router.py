"""
Router principal API v1.

Agrège tous les routers des différents modules métier.

Usage dans main.py:
    from dentaltrack.api.v1.router import api_router

    app = FastAPI(title="DentalTrack API")
    app.include_router(api_router)
"""
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from dentaltrack.core.config import settings
from dentaltrack.database.session import check_database_connection

from .auth import router as auth_router
from .user import router as user_router
from .patient import router as patient_router
from .treatment import router as treatment_router
from .photo import router as photo_router
from .analysis import router as analysis_router
from .dashboard import router as dashboard_router


# =============================================================================
# ROUTER PRINCIPAL
# =============================================================================

api_router = APIRouter(prefix="/api/v1")


api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(patient_router)
api_router.include_router(treatment_router)
api_router.include_router(photo_router)
api_router.include_router(analysis_router)
api_router.include_router(dashboard_router)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@api_router.get(
    "/health",
    tags=["System"],
    summary="Health check",
    description="Vérifie que l'API est opérationnelle.",
)
async def health_check():
    """
    Endpoint de santé pour les load balancers et le monitoring.

    Returns:
        Statut de l'API
    """
    return {
        "status": "healthy",
        "service": "dentaltrack-api",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@api_router.get("/health/live", tags=["System"], summary="Liveness probe")
async def liveness():
    """Le processus répond."""
    return {"status": "alive"}


@api_router.get("/health/ready", tags=["System"], summary="Readiness probe")
def readiness():
    """Prêt à servir si la base de données est joignable."""
    if check_database_connection():
        return {"status": "ready", "database": "connected"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "database": "unreachable"},
    )
