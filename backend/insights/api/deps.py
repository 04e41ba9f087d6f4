import json
from typing import Any

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from insights.core.config import settings
from insights.core.security import decode_token
from insights.db.session import SessionLocal
from insights.services.access import Claims, require_admin
from insights.services.errors import ValidationFailed
from insights.services.storage import ImageStorage, LocalImageStorage

bearer = HTTPBearer(auto_error=False)

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_claims(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> Claims | None:
    # No token, or a token we cannot trust, both mean "no session".
    if creds is None:
        return None
    try:
        payload = decode_token(creds.credentials)
    except jwt.PyJWTError:
        return None
    try:
        return Claims(user_id=int(payload["sub"]), email=str(payload.get("email") or ""), role=str(payload.get("role") or ""))
    except (KeyError, TypeError, ValueError):
        return None

def admin_claims(claims: Claims | None = Depends(current_claims)) -> Claims:
    # Declared first on admin routes: dependencies resolve before path params
    # are validated, and the body is only read by json_body after this.
    return require_admin(claims)

async def json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationFailed({"body": "invalid JSON"})

def image_storage() -> ImageStorage:
    return LocalImageStorage(settings.upload_dir, settings.uploads_url_prefix)
