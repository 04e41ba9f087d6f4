from typing import TypeVar

from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from insights.services.errors import ValidationFailed

M = TypeVar("M", bound=BaseModel)

_http_url = TypeAdapter(HttpUrl)


class CamelModel(BaseModel):
    """Wire models use camelCase keys; snake_case is accepted on input too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def check_url(v: str) -> str:
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError("invalid URL")
    return v


def parse(model: type[M], data) -> M:
    """Validate untyped input into ``model`` or raise ValidationFailed naming every bad field."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = ".".join(str(p) for p in err.get("loc", ())) or "body"
            errors.setdefault(field, err.get("msg", "invalid"))
        raise ValidationFailed(errors)
