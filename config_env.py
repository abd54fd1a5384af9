# Configuration from environment variables (.env or deployment variables).

import os
from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


# ============================================================================
# Database
# ============================================================================
# postgres:// URLs are rewritten to postgresql+asyncpg:// in backend.database
DATABASE_URL = _env("DATABASE_URL")
DATABASE_URL_FALLBACK = _env("DATABASE_URL_FALLBACK", "sqlite+aiosqlite:///./companies.db")

# ============================================================================
# Server
# ============================================================================
PORT = int(_env("PORT", "3000"))
LOG_LEVEL = _env("LOG_LEVEL", "INFO").upper()

# ============================================================================
# CSV import (python -m backend.migrate_csv / start.py)
# ============================================================================
COMPANIES_CSV_PATH = _env("COMPANIES_CSV_PATH")
RELATIONSHIPS_CSV_PATH = _env("RELATIONSHIPS_CSV_PATH")

# ============================================================================
# Layout (validated by cityscape.LayoutConfig.from_env at app startup)
# ============================================================================
# LAYOUT_MIN_DISTANCE, LAYOUT_MAX_DISTANCE, LAYOUT_CLUSTER_SPREAD,
# LAYOUT_BASE_ELEVATION, LAYOUT_ISLAND_HEIGHT
