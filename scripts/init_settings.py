#!/usr/bin/env python3
"""
Settings storage initialization script for the storefront backend.

This script handles:
- Running Alembic migrations (database backend only)
- Seeding the default business rules on first boot
- Optionally resetting stored rules back to the defaults

Usage:
    python scripts/init_settings.py [--backend file|database|memory] [--reset] [--check-only]
"""

import os
import sys
import argparse
import subprocess
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront.core.config import settings
from storefront.core.errors import StorageUnavailable
from storefront.db.session import get_engine
from storefront.services.settings import default_rules
from storefront.services.settings.factory import create_store, get_settings_backend
from sqlalchemy import text
import logging

# configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def check_database_connection():
    """check if db connection is working."""
    try:
        logger.info("Testing database connection...")

        with get_engine().connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()

        logger.info("Database connection successful")
        return True

    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def run_migrations():
    """run Alembic migrations to create/update schema."""
    try:
        logger.info("Running Alembic migrations...")

        # change to project root directory
        os.chdir(project_root)

        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            capture_output=True,
            text=True,
            check=True
        )

        logger.info("Migrations completed successfully")
        logger.debug(f"Migration output: {result.stdout}")
        return True

    except subprocess.CalledProcessError as e:
        logger.error(f"Error running migrations: {e}")
        logger.error(f"Migration error output: {e.stderr}")
        return False


def seed_settings(backend_kind: str, reset: bool = False):
    """persist the default rules if nothing is stored yet (or always, with reset)."""
    store = create_store(get_settings_backend(backend_kind))
    try:
        if reset:
            logger.warning("Resetting business rules to defaults")
            store.save(default_rules())
            return True

        existing = store.backend.read()
        if existing is not None:
            logger.info(f"Business rules already stored (last updated by {existing.updated_by})")
            return True

        store.bootstrap()
        logger.info("Default business rules seeded")
        return True

    except StorageUnavailable as e:
        logger.error(f"Error seeding settings: {e.message}")
        return False
    finally:
        store.close()


def main():
    parser = argparse.ArgumentParser(description="Initialize storefront settings storage")
    parser.add_argument(
        "--backend",
        choices=["file", "database", "memory"],
        default=settings.SETTINGS_BACKEND,
        help="Settings backend to initialize"
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Overwrite stored rules with the defaults (DESTRUCTIVE)"
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only check database connection, don't run migrations"
    )

    args = parser.parse_args()

    logger.info(f"Initializing '{args.backend}' settings backend...")

    if args.reset:
        confirm = input("This will overwrite the stored business rules. Type 'yes' to continue: ")
        if confirm.lower() != 'yes':
            logger.info("Operation cancelled")
            return False

    if args.backend == "database":
        if not check_database_connection():
            logger.error("Database connection failed")
            return False

        if args.check_only:
            logger.info("Database check completed successfully")
            return True

        if not run_migrations():
            logger.error("Migration failed")
            return False

    if not seed_settings(args.backend, reset=args.reset):
        logger.error("Settings seeding failed")
        return False

    logger.info("Settings initialization completed successfully!")
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
