from datetime import datetime

from insights.schemas.base import CamelModel


class UploaderOut(CamelModel):
    name: str | None
    email: str


class ImageOut(CamelModel):
    id: int
    filename: str
    url: str
    alt: str | None
    uploaded_by: int
    created_at: datetime | None = None
    uploader: UploaderOut
