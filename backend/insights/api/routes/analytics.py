from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from insights.api.deps import db, admin_claims, json_body
from insights.schemas.analytics import PostViewStatsOut
from insights.services import analytics as analytics_svc

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/track")
def track(request: Request, body: Any = Depends(json_body), s: Session = Depends(db)):
    ip = analytics_svc.client_ip(
        request.headers.get("x-forwarded-for"),
        request.headers.get("x-real-ip"),
        request.client.host if request.client else None,
    )
    analytics_svc.track_page_view(s, body, ip, request.headers.get("user-agent"))
    return {"success": True}


@router.get("/posts/{post_id}", response_model=PostViewStatsOut)
def post_stats(post_id: int, claims=Depends(admin_claims), s: Session = Depends(db)):
    return analytics_svc.post_view_stats(s, claims, post_id)
