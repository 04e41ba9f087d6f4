import logging
import secrets

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from insights.core.config import settings
from insights.models.registry import Image
from insights.services import audit
from insights.services.access import Claims, require_admin
from insights.services.errors import ValidationFailed
from insights.services.storage import ImageStorage

logger = logging.getLogger(__name__)

# Extensions a stored file may carry for each accepted MIME type; the first
# one is used when the client's name has none of them.
ALLOWED_TYPES = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/webp": ("webp",),
    "image/gif": ("gif",),
}

ALT_MAX = 255


def random_filename(original: str | None, content_type: str) -> str:
    allowed = ALLOWED_TYPES[content_type]
    name = (original or "").rsplit("/", 1)[-1]
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext not in allowed:
        ext = allowed[0]
    return f"{secrets.token_hex(16)}.{ext}"


def check_upload(data: bytes | None, content_type: str | None, max_bytes: int) -> None:
    if not data:
        raise ValidationFailed({"file": "No file provided"}, code="no_file_provided")
    if content_type not in ALLOWED_TYPES:
        raise ValidationFailed(
            {"file": "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed."},
            code="invalid_file_type",
        )
    if len(data) > max_bytes:
        raise ValidationFailed(
            {"file": f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB."},
            code="file_too_large",
        )


def upload_image(
    s: Session,
    claims: Claims | None,
    storage: ImageStorage,
    data: bytes | None,
    original_filename: str | None,
    content_type: str | None,
    alt: str | None = None,
    max_bytes: int | None = None,
) -> Image:
    u = require_admin(claims)
    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes
    try:
        check_upload(data, content_type, limit)
    except ValidationFailed as e:
        logger.warning("upload rejected: %s type=%s size=%s", e.code, content_type, len(data or b""))
        raise

    alt = (alt or "").strip() or None
    if alt is not None and len(alt) > ALT_MAX:
        raise ValidationFailed({"alt": f"String should have at most {ALT_MAX} characters"})

    filename = random_filename(original_filename, content_type)
    url = storage.save(data, filename, content_type)

    img = Image(filename=filename, url=url, alt=alt, uploaded_by=u.user_id)
    s.add(img)
    s.flush()
    image_id = img.id
    audit.record(
        s,
        u,
        action="image.upload",
        entity_type="image",
        entity_id=image_id,
        details={"filename": filename, "original": original_filename, "content_type": content_type},
    )
    s.commit()

    logger.info("image uploaded filename=%s size=%s by=%s", filename, len(data), u.email)
    return (
        s.execute(
            select(Image).options(selectinload(Image.uploader)).where(Image.id == image_id)
        )
        .scalars()
        .one()
    )


def list_images(s: Session, claims: Claims | None) -> list[Image]:
    require_admin(claims)
    return list(
        s.execute(
            select(Image)
            .options(selectinload(Image.uploader))
            .order_by(Image.created_at.desc(), Image.id.desc())
        )
        .scalars()
        .all()
    )
