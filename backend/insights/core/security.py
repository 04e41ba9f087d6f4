import hashlib
import hmac
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from insights.core.config import settings

pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")

def _truncate(p: str) -> str:
    b = p.encode("utf-8")
    if len(b) > 72:
        p = b[:72].decode("utf-8", errors="ignore")
    return p

def hash_password(p: str) -> str:
    if p is None:
        raise ValueError("password is required")
    return pwd.hash(_truncate(str(p)))

def verify_password(p: str, hashed: str) -> bool:
    if p is None or hashed is None:
        return False
    return pwd.verify(_truncate(str(p)), hashed)

def create_access_token(sub: str, email: str, role: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.jwt_expires_min)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])

def hash_ip(ip: str, salt: str | None = None) -> str:
    """Keyed one-way digest of a client address. The raw address is never stored."""
    key = (salt if salt is not None else settings.ip_hash_salt).encode("utf-8")
    return hmac.new(key, (ip or "unknown").encode("utf-8"), hashlib.sha256).hexdigest()
