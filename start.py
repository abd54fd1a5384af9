"""
Unified startup script.

Handles:
    1. Database initialisation (creates tables, imports CSV data if configured)
    2. Starts the FastAPI backend (uvicorn)

Usage:
    python start.py               # import (if COMPANIES_CSV_PATH is set) + serve
    python start.py --skip-import # serve only
"""

import argparse
import asyncio
import logging
import os
import sys

os.chdir(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ".")

import config_env

logger = logging.getLogger("start")


async def run_db_import():
    """Create tables and import CSV data when paths are configured."""
    from backend.database import init_db
    from backend.migrate_csv import migrate

    if not (config_env.COMPANIES_CSV_PATH or config_env.RELATIONSHIPS_CSV_PATH):
        logger.info("No COMPANIES_CSV_PATH / RELATIONSHIPS_CSV_PATH set, skipping CSV import")
        await init_db()
        return
    # migrate() creates the tables itself
    await migrate(config_env.COMPANIES_CSV_PATH or None, config_env.RELATIONSHIPS_CSV_PATH or None)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)-8s  %(message)s")
    parser = argparse.ArgumentParser()
    parser.add_argument("--skip-import", action="store_true", help="Start FastAPI only")
    args = parser.parse_args()

    port = str(config_env.PORT)

    logger.info("[1/2] Database initialization...")
    if args.skip_import:
        logger.info("  Skipping CSV import (--skip-import)")
    else:
        asyncio.run(run_db_import())

    logger.info("[2/2] Starting FastAPI on port %s...", port)
    os.execvp(
        sys.executable,
        [sys.executable, "-m", "uvicorn", "backend.app:app",
         "--host", "0.0.0.0", "--port", port],
    )


if __name__ == "__main__":
    main()
