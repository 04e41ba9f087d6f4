import logging

from sqlalchemy import select
from insights.core.config import settings
from insights.core.security import hash_password
from insights.db.session import SessionLocal
from insights.models.registry import Category, User
from insights.services.access import ADMIN

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("AI Tools", "ai-tools"),
    ("Productivity", "productivity"),
    ("Best Practices", "best-practices"),
    ("Machine Learning", "machine-learning"),
    ("Transformers", "transformers"),
    ("Deep Learning", "deep-learning"),
    ("Quick Thoughts", "quick-thoughts"),
]

def seed(db) -> None:
    email = settings.seed_admin_email.strip().lower()
    existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if not existing:
        db.add(
            User(
                email=email,
                password_hash=hash_password(settings.seed_admin_password),
                name=settings.seed_admin_name,
                role=ADMIN,
            )
        )
        logger.info("created admin user %s", email)

    have = set(db.execute(select(Category.slug)).scalars().all())
    for name, slug in DEFAULT_CATEGORIES:
        if slug not in have:
            db.add(Category(name=name, slug=slug))
    db.commit()

def main():
    logging.basicConfig(level=settings.log_level.upper())
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()

if __name__ == "__main__":
    main()
