from dataclasses import dataclass

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from insights.api.deps import db, admin_claims, image_storage
from insights.core.config import settings
from insights.schemas.image import ImageOut
from insights.services import images as image_svc

router = APIRouter(prefix="/images", tags=["images"])


@dataclass
class UploadForm:
    data: bytes | None = None
    filename: str | None = None
    content_type: str | None = None
    alt: str | None = None


async def upload_form(request: Request) -> UploadForm:
    # Parsed by hand so the multipart body is only read once the caller has
    # passed the admin gate.
    form = await request.form()
    try:
        out = UploadForm()
        file = form.get("file")
        # form values are either plain strings or uploaded files
        if file is not None and not isinstance(file, str):
            # One byte past the limit is enough to know the upload is too large.
            out.data = await file.read(settings.max_upload_bytes + 1)
            out.filename = file.filename
            out.content_type = file.content_type
        alt = form.get("alt")
        if isinstance(alt, str):
            out.alt = alt
        return out
    finally:
        await form.close()


@router.get("", response_model=list[ImageOut])
def list_images(claims=Depends(admin_claims), s: Session = Depends(db)):
    return image_svc.list_images(s, claims)


@router.post("/upload", response_model=ImageOut)
def upload_image(
    claims=Depends(admin_claims),
    form: UploadForm = Depends(upload_form),
    s: Session = Depends(db),
    storage=Depends(image_storage),
):
    return image_svc.upload_image(
        s, claims, storage, form.data, form.filename, form.content_type, alt=form.alt
    )
