from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from insights.api.deps import db, admin_claims, current_claims, json_body
from insights.schemas.post import PostOut
from insights.services import posts as post_svc

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostOut])
def list_posts(
    published: bool = Query(default=False),
    category: str | None = Query(default=None),
    s: Session = Depends(db),
    claims=Depends(current_claims),
):
    return post_svc.list_posts(s, claims, published_only=published, category=category)


@router.post("", response_model=PostOut, status_code=201)
def create_post(claims=Depends(admin_claims), body: Any = Depends(json_body), s: Session = Depends(db)):
    return post_svc.create_post(s, claims, body)


@router.get("/{slug}", response_model=PostOut)
def get_post(slug: str, s: Session = Depends(db), claims=Depends(current_claims)):
    return post_svc.get_post(s, slug, claims)


@router.patch("/{slug}", response_model=PostOut)
def update_post(slug: str, claims=Depends(admin_claims), body: Any = Depends(json_body), s: Session = Depends(db)):
    return post_svc.update_post(s, claims, slug, body)


@router.delete("/{slug}")
def delete_post(slug: str, claims=Depends(admin_claims), s: Session = Depends(db)):
    post_svc.delete_post(s, claims, slug)
    return {"success": True}
