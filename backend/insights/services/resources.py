import logging
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from insights.models.registry import Resource
from insights.models.resource import RESOURCE_CATEGORIES
from insights.schemas.base import parse
from insights.schemas.resource import ResourceCreate, ResourceUpdate
from insights.services import audit
from insights.services.access import Claims, require_admin
from insights.services.errors import NotFound, ValidationFailed

logger = logging.getLogger(__name__)


def _find(s: Session, resource_id: int) -> Resource:
    r = s.execute(select(Resource).where(Resource.id == resource_id)).scalar_one_or_none()
    if r is None:
        raise NotFound("resource_not_found")
    return r


def list_resources(s: Session, category: str | None = None) -> list[Resource]:
    q = select(Resource)
    if category:
        if category not in RESOURCE_CATEGORIES:
            raise ValidationFailed({"category": "must be one of " + ", ".join(RESOURCE_CATEGORIES)})
        q = q.where(Resource.category == category)
    # id breaks ties between equal manual order values
    q = q.order_by(Resource.order.asc(), Resource.id.asc())
    return list(s.execute(q).scalars().all())


def create_resource(s: Session, claims: Claims | None, data: Mapping[str, Any]) -> Resource:
    u = require_admin(claims)
    body = parse(ResourceCreate, data)

    r = Resource(
        title=body.title,
        description=body.description,
        url=body.url,
        category=body.category,
        order=body.order,
    )
    s.add(r)
    s.flush()
    audit.record(
        s,
        u,
        action="resource.create",
        entity_type="resource",
        entity_id=r.id,
        details={"title": r.title, "category": r.category, "order": r.order},
    )
    s.commit()
    s.refresh(r)

    logger.info("resource created id=%s category=%s by=%s", r.id, r.category, u.email)
    return r


def update_resource(s: Session, claims: Claims | None, resource_id: int, data: Mapping[str, Any]) -> Resource:
    u = require_admin(claims)
    body = parse(ResourceUpdate, data)
    r = _find(s, resource_id)

    changes = body.changes()
    for field, value in changes.items():
        setattr(r, field, value)
    audit.record(
        s,
        u,
        action="resource.update",
        entity_type="resource",
        entity_id=resource_id,
        details={"fields": sorted(changes)},
    )
    s.commit()
    s.refresh(r)

    logger.info("resource updated id=%s fields=%s by=%s", resource_id, sorted(changes), u.email)
    return r


def delete_resource(s: Session, claims: Claims | None, resource_id: int) -> None:
    u = require_admin(claims)
    r = _find(s, resource_id)
    details = {"title": r.title, "category": r.category}
    s.delete(r)
    audit.record(s, u, action="resource.delete", entity_type="resource", entity_id=resource_id, details=details)
    s.commit()

    logger.info("resource deleted id=%s by=%s", resource_id, u.email)
