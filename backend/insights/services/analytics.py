import logging
from typing import Any, Mapping

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from insights.models.registry import PageView, Post
from insights.schemas.base import parse
from insights.schemas.analytics import PageViewIn
from insights.core.security import hash_ip
from insights.services.access import Claims, require_admin
from insights.services.errors import NotFound

logger = logging.getLogger(__name__)

# Reader clients only send the follow-up row (with readingTime) after this dwell.
MIN_TRACKED_READING_SECONDS = 5


def client_ip(forwarded_for: str | None, real_ip: str | None, peer: str | None) -> str:
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return peer or "unknown"


def track_page_view(
    s: Session,
    data: Mapping[str, Any],
    ip: str,
    user_agent: str | None = None,
) -> PageView:
    body = parse(PageViewIn, data)
    exists = s.execute(select(Post.id).where(Post.id == body.post_id)).scalar_one_or_none()
    if exists is None:
        raise NotFound("post_not_found")

    pv = PageView(
        post_id=body.post_id,
        ip_hash=hash_ip(ip),
        user_agent=(user_agent or "")[:512] or None,
        reading_time=body.reading_time,
    )
    s.add(pv)
    s.commit()
    s.refresh(pv)
    logger.debug("page view post_id=%s reading_time=%s", pv.post_id, pv.reading_time)
    return pv


def post_view_stats(s: Session, claims: Claims | None, post_id: int) -> dict:
    require_admin(claims)
    if s.get(Post, post_id) is None:
        raise NotFound("post_not_found")
    views, unique, avg_rt = s.execute(
        select(
            func.count(PageView.id),
            func.count(func.distinct(PageView.ip_hash)),
            func.avg(PageView.reading_time),
        ).where(PageView.post_id == post_id)
    ).one()
    return {
        "post_id": post_id,
        "views": int(views or 0),
        "unique_visitors": int(unique or 0),
        "avg_reading_time": float(avg_rt) if avg_rt is not None else None,
    }
