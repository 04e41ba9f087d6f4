from pydantic import Field

from insights.schemas.base import CamelModel


class PageViewIn(CamelModel):
    post_id: int
    reading_time: int | None = Field(None, ge=0, le=2**31 - 1)


class PostViewStatsOut(CamelModel):
    post_id: int
    views: int
    unique_visitors: int
    avg_reading_time: float | None = None
