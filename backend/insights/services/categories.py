from sqlalchemy import select, func
from sqlalchemy.orm import Session

from insights.models.registry import Category, Post, post_categories
from insights.services.errors import NotFound, ValidationFailed


def list_categories(s: Session) -> list[dict]:
    published_count = (
        select(func.count(Post.id))
        .select_from(post_categories.join(Post, Post.id == post_categories.c.post_id))
        .where(post_categories.c.category_id == Category.id, Post.published.is_(True))
        .scalar_subquery()
    )
    rows = s.execute(
        select(Category, published_count.label("post_count")).order_by(Category.name.asc(), Category.id.asc())
    ).all()
    return [
        {"id": c.id, "name": c.name, "slug": c.slug, "post_count": int(n or 0)}
        for (c, n) in rows
    ]


def get_category(s: Session, slug: str) -> Category:
    c = s.execute(select(Category).where(Category.slug == slug)).scalar_one_or_none()
    if c is None:
        raise NotFound("category_not_found")
    return c


def resolve_categories(s: Session, slugs: list[str]) -> list[Category]:
    wanted = list(dict.fromkeys(slugs))
    if not wanted:
        return []
    found = s.execute(select(Category).where(Category.slug.in_(wanted))).scalars().all()
    by_slug = {c.slug: c for c in found}
    missing = [sl for sl in wanted if sl not in by_slug]
    if missing:
        raise ValidationFailed({"categories": "unknown category: " + ", ".join(missing)})
    return [by_slug[sl] for sl in wanted]
