# movieshelf/db/seed.py
"""Seed categories into the database"""
from sqlalchemy.orm import Session
from ..models import Category
from ..database import SessionLocal
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Categories must exist before movies can reference them
CATEGORIES = [
    "Action",
    "Drama",
    "Comedy",
    "Horror",
    "Romance",
    "Sci-Fi",
    "Fantasy",
    "Thriller",
    "Animation",
    "Documentary",
]


def seed_categories(db: Session, names=CATEGORIES) -> int:
    """Insert missing categories. Returns how many were added."""
    logger.info("Seeding categories...")
    added = 0

    for name in names:
        existing = db.query(Category).filter(Category.category == name).first()
        if existing:
            logger.info(f"Category '{name}' already exists, skipping...")
            continue

        db.add(Category(category=name))
        added += 1
        logger.info(f"Added category: {name}")

    db.commit()
    logger.info("✅ Categories seeded successfully!")
    return added


def main():
    db = SessionLocal()

    try:
        seed_categories(db)
        logger.info(f"✅ Total Categories: {db.query(Category).count()}")
    except Exception as e:
        logger.error(f"❌ Error seeding data: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
