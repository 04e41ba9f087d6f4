from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from insights.api.deps import db, admin_claims
from insights.schemas.stats import StatsOut
from insights.services.stats import dashboard_stats

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=StatsOut)
def stats(claims=Depends(admin_claims), s: Session = Depends(db)):
    return dashboard_stats(s, claims)
