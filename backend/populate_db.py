# backend/populate_db.py
"""Seed the SQL database with the administrator and the showcase content.

Usage: python populate_db.py [--reset]

--reset wipes projects, achievements, tools, comments and likes first.
Users are preserved.
"""
import logging
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from models.achievement import Achievement
from models.comment import Comment
from models.like import Like
from models.project import Project
from models.tool import Tool
from storage.database import DatabaseStorage
from storage.seed import seed_sample_content

logger = logging.getLogger("populate_db")


def clear_content():
    """Delete all portfolio content; likes and comments first because of the foreign keys."""
    with SessionLocal.begin() as session:
        for model in (Like, Comment, Project, Achievement, Tool):
            deleted = session.query(model).delete()
            logger.info("Deleted %d rows from %s", deleted, model.__tablename__)


def populate_database(reset: bool = False) -> int:
    """Main execution function to populate database."""
    init_db()
    if reset:
        clear_content()

    storage = DatabaseStorage(SessionLocal)
    admin = storage.seed_admin()
    logger.info("Administrator: %s", admin.email)
    return seed_sample_content(storage)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    created = populate_database(reset="--reset" in sys.argv[1:])
    print(f"Inserted {created} sample rows.")
