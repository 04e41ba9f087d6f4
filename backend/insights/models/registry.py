# Import every model so relationship() string targets resolve and
# Base.metadata is complete.
from insights.models.user import User
from insights.models.category import Category, post_categories
from insights.models.post import Post
from insights.models.resource import Resource
from insights.models.image import Image
from insights.models.page_view import PageView
from insights.models.audit_log import AuditLog

__all__ = [
    "User",
    "Category",
    "post_categories",
    "Post",
    "Resource",
    "Image",
    "PageView",
    "AuditLog",
]
