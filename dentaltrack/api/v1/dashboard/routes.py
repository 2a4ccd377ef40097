"""
Routes FastAPI du tableau de bord.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dentaltrack.core.auth.user_auth import get_current_user
from dentaltrack.database.session import get_db
from dentaltrack.models.user.user import User

from dentaltrack.api.v1.dashboard.schemas import DashboardStats
from dentaltrack.api.v1.dashboard.services import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
):
    """Compteurs patients, traitements, clichés et analyses."""
    return DashboardService(db).get_stats()
