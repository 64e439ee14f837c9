#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the arbiter tables and seeds the meal catalog
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("mealarbiter.init_db")


def init_schema() -> bool:
    """Create tables and report what exists"""
    logger.info("=" * 60)
    logger.info("Initializing database schema...")
    logger.info("=" * 60)

    try:
        from sqlalchemy import inspect
        from domain.models.database import engine, init_database

        init_database()

        inspector = inspect(engine)
        tables = inspector.get_table_names()
        logger.info(f"Created {len(tables)} tables: {', '.join(tables)}")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        return False


def seed_catalog() -> bool:
    """Seed the meal catalog"""
    logger.info("=" * 60)
    logger.info("Seeding meal catalog...")
    logger.info("=" * 60)

    from domain.models import SessionLocal
    from scripts.seed_meals import seed_meals

    db = SessionLocal()
    try:
        seed_meals(db)
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to seed meals: {e}", exc_info=True)
        return False
    finally:
        db.close()


def main() -> int:
    if not init_schema():
        return 1
    if not seed_catalog():
        return 1
    logger.info("Database ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
