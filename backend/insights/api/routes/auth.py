import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import select
from insights.api.deps import db
from insights.schemas.auth import LoginIn, TokenOut
from insights.models.registry import User
from insights.core.security import verify_password, create_access_token
from insights.services.errors import Unauthorized

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, s: Session = Depends(db)):
    u = s.execute(select(User).where(User.email == body.email)).scalar_one_or_none()
    if not u or not verify_password(body.password, u.password_hash):
        logger.warning("failed login for %s", body.email)
        raise Unauthorized("bad_credentials")
    token = create_access_token(sub=str(u.id), email=u.email, role=u.role)
    return {"access_token": token, "role": u.role}
