from insights.schemas.base import CamelModel


class CategoryOut(CamelModel):
    id: int
    name: str
    slug: str


class CategoryWithCountOut(CategoryOut):
    post_count: int = 0
