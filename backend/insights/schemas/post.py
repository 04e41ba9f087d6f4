from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from insights.schemas.base import CamelModel, check_url
from insights.schemas.category import CategoryOut

SLUG_PATTERN = r"^[a-z0-9-]+$"

# Match the column sizes on models.post.Post.
COVER_IMAGE_MAX = 1024
READ_TIME_MAX = 32


def _cover_image(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    return check_url(v)


class PostCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    slug: str = Field(min_length=1, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1)
    cover_image: str | None = Field(None, max_length=COVER_IMAGE_MAX)
    read_time: str = Field(max_length=READ_TIME_MAX)
    categories: list[str] = Field(min_length=1)
    published: bool = False

    @field_validator("cover_image")
    @classmethod
    def cover_image_url(cls, v: str | None):
        return _cover_image(v)


class PostUpdate(CamelModel):
    id: int
    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = Field(None, min_length=1)
    cover_image: str | None = Field(None, max_length=COVER_IMAGE_MAX)
    read_time: str | None = Field(None, max_length=READ_TIME_MAX)
    categories: list[str] | None = None
    published: bool | None = None

    @field_validator(
        "title", "slug", "excerpt", "content", "read_time", "categories", "published",
        mode="before",
    )
    @classmethod
    def not_null_when_present(cls, v, info: ValidationInfo):
        # Omitted fields are left unchanged; an explicit null is not a valid value.
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("cover_image")
    @classmethod
    def cover_image_url(cls, v: str | None):
        return _cover_image(v)

    def changes(self) -> dict:
        """Only the fields the caller actually sent, minus the identifier."""
        return {k: getattr(self, k) for k in self.model_fields_set if k != "id"}


class AuthorOut(CamelModel):
    id: int
    name: str | None
    email: str


class PostOut(CamelModel):
    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    cover_image: str | None
    read_time: str
    published: bool
    published_at: datetime | None
    author_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    categories: list[CategoryOut]
    author: AuthorOut
