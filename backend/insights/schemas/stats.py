from datetime import datetime

from insights.schemas.base import CamelModel


class RecentPostOut(CamelModel):
    id: int
    title: str
    slug: str
    published: bool
    created_at: datetime | None = None


class StatsOut(CamelModel):
    total_posts: int
    published_posts: int
    draft_posts: int
    images: int
    resources: int
    page_views: int
    recent_posts: list[RecentPostOut]
