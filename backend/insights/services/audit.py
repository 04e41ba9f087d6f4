from sqlalchemy import select
from sqlalchemy.orm import Session

from insights.models.registry import AuditLog
from insights.services.access import Claims, require_admin


def record(
    s: Session,
    claims: Claims,
    action: str,
    entity_type: str,
    entity_id: int | None = None,
    details: dict | None = None,
) -> AuditLog:
    """Stage an audit row for an admin mutation.

    The row is only added to the session. The caller commits it together with
    the change it describes, so either both persist or neither does.
    """
    row = AuditLog(
        actor_id=claims.user_id,
        actor=claims.email,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )
    s.add(row)
    return row


def list_entries(
    s: Session,
    claims: Claims | None,
    actor: str | None = None,
    entity_type: str | None = None,
    action: str | None = None,
    limit: int = 200,
) -> list[AuditLog]:
    require_admin(claims)
    q = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())

    if actor:
        q = q.where(AuditLog.actor == actor)
    if entity_type:
        q = q.where(AuditLog.entity_type == entity_type)
    if action:
        q = q.where(AuditLog.action == action)

    return list(s.execute(q.limit(limit)).scalars().all())
