from dataclasses import dataclass

from insights.services.errors import Unauthorized

ADMIN = "ADMIN"
READER = "READER"


@dataclass(frozen=True)
class Claims:
    user_id: int
    email: str
    role: str


def is_admin(claims: Claims | None) -> bool:
    return claims is not None and claims.role == ADMIN


def require_admin(claims: Claims | None) -> Claims:
    if not is_admin(claims):
        raise Unauthorized()
    return claims
