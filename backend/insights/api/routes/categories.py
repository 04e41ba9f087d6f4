from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from insights.api.deps import db, current_claims
from insights.schemas.category import CategoryOut, CategoryWithCountOut
from insights.schemas.post import PostOut
from insights.services import categories as category_svc
from insights.services import posts as post_svc

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryWithCountOut])
def list_categories(s: Session = Depends(db)):
    return category_svc.list_categories(s)


@router.get("/{slug}", response_model=CategoryOut)
def get_category(slug: str, s: Session = Depends(db)):
    return category_svc.get_category(s, slug)


@router.get("/{slug}/posts", response_model=list[PostOut])
def category_posts(slug: str, s: Session = Depends(db), claims=Depends(current_claims)):
    category_svc.get_category(s, slug)
    return post_svc.list_posts(s, claims, published_only=True, category=slug)
