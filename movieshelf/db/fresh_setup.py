# movieshelf/db/fresh_setup.py
"""Drop and recreate all tables, then seed categories"""
from ..database import Base, engine, SessionLocal
from .. import models  # noqa: F401
from .seed import seed_categories
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_tables():
    """Drop and recreate all tables"""
    logger.info("Creating all tables...")

    try:
        Base.metadata.drop_all(bind=engine)
        logger.info("Dropped all existing tables")

        Base.metadata.create_all(bind=engine)
        logger.info("Created all tables successfully")

    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise


def main():
    create_tables()
    db = SessionLocal()
    try:
        seed_categories(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
