from sqlalchemy import select, func
from sqlalchemy.orm import Session

from insights.models.registry import Image, PageView, Post, Resource
from insights.services.access import Claims, require_admin


def _count(s: Session, q) -> int:
    return int(s.execute(q).scalar_one() or 0)


def dashboard_stats(s: Session, claims: Claims | None) -> dict:
    require_admin(claims)
    total = _count(s, select(func.count(Post.id)))
    published = _count(s, select(func.count(Post.id)).where(Post.published.is_(True)))
    recent = (
        s.execute(select(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(5))
        .scalars()
        .all()
    )
    return {
        "total_posts": total,
        "published_posts": published,
        "draft_posts": total - published,
        "images": _count(s, select(func.count(Image.id))),
        "resources": _count(s, select(func.count(Resource.id))),
        "page_views": _count(s, select(func.count(PageView.id))),
        "recent_posts": list(recent),
    }
