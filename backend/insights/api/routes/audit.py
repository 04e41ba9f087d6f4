from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from insights.api.deps import db, admin_claims
from insights.schemas.audit import AuditOut
from insights.services import audit as audit_svc

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=list[AuditOut])
def list_audit(
    claims=Depends(admin_claims),
    s: Session = Depends(db),
    actor: str | None = Query(default=None),
    entity_type: str | None = Query(default=None),
    action: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
):
    return audit_svc.list_entries(s, claims, actor=actor, entity_type=entity_type, action=action, limit=limit)
