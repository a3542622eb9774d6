from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile
from ..models import Profile
from ..schemas import ActivityRead, DashboardStats
from ..services import activity
from ..services.dashboard import collect_stats

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> DashboardStats:
    return collect_stats(db)


@router.get("/activity", response_model=list[ActivityRead])
def activity_list(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[ActivityRead]:
    return activity.recent(db, limit=max(1, min(limit, 200)))
