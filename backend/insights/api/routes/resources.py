from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from insights.api.deps import db, admin_claims, json_body
from insights.schemas.resource import ResourceOut
from insights.services import resources as resource_svc

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("", response_model=list[ResourceOut])
def list_resources(category: str | None = Query(default=None), s: Session = Depends(db)):
    return resource_svc.list_resources(s, category)


@router.post("", response_model=ResourceOut)
def create_resource(claims=Depends(admin_claims), body: Any = Depends(json_body), s: Session = Depends(db)):
    return resource_svc.create_resource(s, claims, body)


@router.patch("/{resource_id}", response_model=ResourceOut)
def update_resource(
    resource_id: int,
    claims=Depends(admin_claims),
    body: Any = Depends(json_body),
    s: Session = Depends(db),
):
    return resource_svc.update_resource(s, claims, resource_id, body)


@router.delete("/{resource_id}")
def delete_resource(resource_id: int, claims=Depends(admin_claims), s: Session = Depends(db)):
    resource_svc.delete_resource(s, claims, resource_id)
    return {"success": True}
