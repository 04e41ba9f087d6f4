from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from insights.db.base import Base
from insights.models.category import post_categories


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    excerpt: Mapped[str] = mapped_column(String(500))
    content: Mapped[str] = mapped_column(Text)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    read_time: Mapped[str] = mapped_column(String(32))

    # published_at is set exactly when published is true
    published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)

    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, onupdate=func.now())

    author = relationship("User", back_populates="posts")
    categories = relationship(
        "Category",
        secondary=post_categories,
        back_populates="posts",
        order_by="Category.name",
    )
    page_views = relationship("PageView", back_populates="post", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(
            "(published AND published_at IS NOT NULL) OR (NOT published AND published_at IS NULL)",
            name="ck_posts_published_at",
        ),
    )
