import logging
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from insights.models.registry import Category, Post
from insights.schemas.base import parse
from insights.schemas.post import PostCreate, PostUpdate
from insights.services import audit
from insights.services.access import Claims, is_admin, require_admin
from insights.services.categories import resolve_categories
from insights.services.errors import Conflict, NotFound, ServiceError, ValidationFailed
from insights.utils.timezone import utcnow

logger = logging.getLogger(__name__)

_EDITABLE = ("title", "slug", "excerpt", "content", "cover_image", "read_time")


def _post_query():
    return select(Post).options(selectinload(Post.categories), selectinload(Post.author))


def _load(s: Session, post_id: int) -> Post:
    return (
        s.execute(_post_query().where(Post.id == post_id).execution_options(populate_existing=True))
        .scalars()
        .one()
    )


def _find(s: Session, slug: str) -> Post:
    p = s.execute(select(Post).where(Post.slug == slug)).scalar_one_or_none()
    if p is None:
        raise NotFound("post_not_found")
    return p


def integrity_failure(e: IntegrityError) -> ServiceError:
    """Translate a store constraint failure on posts into a domain error."""
    msg = str(e.orig).lower()
    if "slug" in msg:
        return Conflict("post_slug_exists")
    if "foreign key" in msg:
        # the author row went away while its token was still valid
        return NotFound("author_not_found")
    return Conflict("post_constraint_failed")


def _flush(s: Session) -> None:
    # Slug uniqueness is left to the store; a duplicate surfaces here.
    try:
        s.flush()
    except IntegrityError as e:
        s.rollback()
        logger.warning("post write rejected by store: %s", e.orig)
        raise integrity_failure(e) from e


def replace_categories(post: Post, categories: list[Category]) -> None:
    """Make ``categories`` the post's complete category set.

    Links not in ``categories`` are dropped and new ones added; an empty list
    clears every link. There is no additive merge.
    """
    post.categories = list(categories)


def create_post(s: Session, claims: Claims | None, data: Mapping[str, Any]) -> Post:
    u = require_admin(claims)
    body = parse(PostCreate, data)
    categories = resolve_categories(s, body.categories)

    p = Post(
        title=body.title,
        slug=body.slug,
        excerpt=body.excerpt,
        content=body.content,
        cover_image=body.cover_image,
        read_time=body.read_time,
        published=body.published,
        published_at=utcnow() if body.published else None,
        author_id=u.user_id,
    )
    replace_categories(p, categories)
    s.add(p)
    _flush(s)
    post_id = p.id
    audit.record(
        s,
        u,
        action="post.create",
        entity_type="post",
        entity_id=post_id,
        details={"slug": body.slug, "published": body.published, "categories": body.categories},
    )
    s.commit()

    logger.info("post created slug=%s published=%s by=%s", body.slug, body.published, u.email)
    return _load(s, post_id)


def get_post(s: Session, slug: str, claims: Claims | None = None) -> Post:
    q = _post_query().where(Post.slug == slug)
    if not is_admin(claims):
        q = q.where(Post.published.is_(True))
    p = s.execute(q).scalars().first()
    if p is None:
        raise NotFound("post_not_found")
    return p


def list_posts(
    s: Session,
    claims: Claims | None = None,
    published_only: bool = False,
    category: str | None = None,
) -> list[Post]:
    q = _post_query()
    if published_only or not is_admin(claims):
        q = q.where(Post.published.is_(True))
    if category:
        q = q.where(Post.categories.any(Category.slug == category))
    # Drafts have no published_at and always sort after dated posts.
    q = q.order_by(
        Post.published_at.is_(None).asc(),
        Post.published_at.desc(),
        Post.created_at.desc(),
        Post.id.desc(),
    )
    return list(s.execute(q).scalars().all())


def update_post(s: Session, claims: Claims | None, slug: str, data: Mapping[str, Any]) -> Post:
    u = require_admin(claims)
    body = parse(PostUpdate, data)
    p = _find(s, slug)
    if body.id != p.id:
        raise ValidationFailed({"id": "does not match post"})

    changes = body.changes()

    if "categories" in changes:
        replace_categories(p, resolve_categories(s, changes["categories"]))

    for field in _EDITABLE:
        if field in changes:
            setattr(p, field, changes[field])

    if "published" in changes:
        if changes["published"]:
            if not p.published or p.published_at is None:
                p.published_at = utcnow()
        else:
            p.published_at = None
        p.published = changes["published"]

    p.updated_at = utcnow()
    post_id = p.id
    _flush(s)
    audit.record(
        s,
        u,
        action="post.update",
        entity_type="post",
        entity_id=post_id,
        details={"slug": slug, "fields": sorted(changes)},
    )
    s.commit()

    logger.info("post updated slug=%s fields=%s by=%s", slug, sorted(changes), u.email)
    return _load(s, post_id)


def delete_post(s: Session, claims: Claims | None, slug: str) -> None:
    u = require_admin(claims)
    p = _find(s, slug)
    post_id = p.id
    s.delete(p)
    audit.record(s, u, action="post.delete", entity_type="post", entity_id=post_id, details={"slug": slug})
    s.commit()

    logger.info("post deleted slug=%s by=%s", slug, u.email)
