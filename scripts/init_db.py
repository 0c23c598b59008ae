#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the schema and seeds reference data (allergy catalog, roles,
default school, bootstrap admin). Safe to run repeatedly.
"""

import logging
import sys
import os

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from domain.models import init_database

logger = logging.getLogger("schoolmeal.scripts.init_db")


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )
    logger.info(f"init_db_started environment={settings.environment.value}")
    try:
        init_database()
    except SQLAlchemyError as e:
        logger.error(f"init_db_failed error={e}")
        return 1
    logger.info("init_db_completed")
    return 0


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("SchoolMeal Database Initialization")
    print("=" * 60 + "\n")

    exit_code = main()

    print("\n" + "=" * 60)
    print("SUCCESS! The database is ready to use." if exit_code == 0 else "FAILED! Check the errors above.")
    print("=" * 60 + "\n")

    sys.exit(exit_code)
