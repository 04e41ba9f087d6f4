from datetime import datetime
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from insights.schemas.base import CamelModel, check_url

ResourceCategory = Literal["GITHUB", "TOOL"]

URL_MAX = 1024
ORDER_MIN = -(2**31)
ORDER_MAX = 2**31 - 1


class ResourceCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    url: str = Field(max_length=URL_MAX)
    category: ResourceCategory
    order: int = Field(0, ge=ORDER_MIN, le=ORDER_MAX)

    @field_validator("url")
    @classmethod
    def url_valid(cls, v: str):
        return check_url(v)


class ResourceUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=1000)
    url: str | None = Field(None, max_length=URL_MAX)
    category: ResourceCategory | None = None
    order: int | None = Field(None, ge=ORDER_MIN, le=ORDER_MAX)

    @field_validator("title", "description", "url", "category", "order", mode="before")
    @classmethod
    def not_null_when_present(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("url")
    @classmethod
    def url_valid(cls, v: str | None):
        if v is None:
            return None
        return check_url(v)

    def changes(self) -> dict:
        return {k: getattr(self, k) for k in self.model_fields_set}


class ResourceOut(CamelModel):
    id: int
    title: str
    description: str
    url: str
    category: ResourceCategory
    order: int
    created_at: datetime | None = None
