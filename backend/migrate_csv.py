"""
Import script: company / relationship CSV exports -> database.

Usage:
    python -m backend.migrate_csv --companies companies.csv
    python -m backend.migrate_csv --companies companies.csv --relationships relationships.csv

Companies already present (same name) are left untouched. Relationship rows
reference companies by name; rows with unknown companies, unknown types,
self-references or out-of-range strengths are skipped with a warning.
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import logging
import math
from typing import Optional

import pandas as pd
from sqlalchemy import select

import config_env
from backend.database import async_session, init_db
from backend.models import RELATIONSHIP_TYPES, Company, Relationship

logger = logging.getLogger(__name__)


COLUMN_MAP = {
    "Company Name": "company_name",
    "Name": "company_name",
    "Industry": "industry",
    "Sub-Industry": "sub_industry",
    "Website": "website",
    "Headquarters": "headquarters_location",
    "HQ Location": "headquarters_location",
    "Description": "description",
    "Founded Year": "founded_year",
    "Total Headcount": "employee_count",
    "Business Model": "business_model",
    "Markets": "markets",
    "Mosaic (Overall)": "mosaic_overall",
    "Commercial Maturity": "commercial_maturity",
    "Country": "country",
    "Total Funding ($M)": "total_funding_m",
    "Latest Funding Amount ($M)": "latest_funding_amount_m",
    "Latest Funding Round": "latest_funding_round",
    "Latest Funding Date": "latest_funding_date",
    "Status": "company_status_csv",
    "Stock Ticker": "stock_ticker",
    "City Style": "city_metaphor_style",
}

RELATIONSHIP_COLUMN_MAP = {
    "Company 1": "company1",
    "Company 2": "company2",
    "Relationship Type": "relationship_type",
    "Type": "relationship_type",
    "Strength": "strength",
    "Start Date": "start_date",
    "End Date": "end_date",
    "Status": "status",
    "Description": "description",
}

TEXT_FIELDS = (
    "industry", "sub_industry", "website", "headquarters_location", "description",
    "business_model", "markets", "commercial_maturity", "country",
    "latest_funding_round", "company_status_csv", "stock_ticker", "city_metaphor_style",
)


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def _text(value) -> Optional[str]:
    s = str(value).strip() if value is not None else ""
    return s or None


def _parse_float(value) -> Optional[float]:
    """'$1,250.5' -> 1250.5; blanks and junk -> None."""
    s = str(value or "").strip().replace(",", "").replace("$", "")
    if not s:
        return None
    try:
        f = float(s)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def _parse_int(value) -> Optional[int]:
    f = _parse_float(value)
    return int(f) if f is not None else None


def _parse_date(value) -> Optional[dt.date]:
    s = str(value or "").strip()
    if not s:
        return None
    ts = pd.to_datetime(s, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def _parse_year(value) -> Optional[dt.date]:
    year = _parse_int(value)
    if year is None or not 1800 <= year <= 2100:
        return None
    return dt.date(year, 1, 1)


# ---------------------------------------------------------------------------
# CSV -> row dicts
# ---------------------------------------------------------------------------

def _read_csv(csv_path: str, column_map: dict) -> pd.DataFrame:
    raw = pd.read_csv(csv_path, encoding="utf-8", dtype=str).fillna("")
    raw.columns = [c.strip() for c in raw.columns]
    return raw.rename(columns={k: v for k, v in column_map.items() if k in raw.columns})


def read_companies_csv(csv_path: str) -> list[dict]:
    """Parse a company export into Company keyword dicts (rows without a name are dropped)."""
    df = _read_csv(csv_path, COLUMN_MAP)
    rows = []
    for _, row in df.iterrows():
        name = _text(row.get("company_name"))
        if not name:
            continue
        data = {"company_name": name}
        for field in TEXT_FIELDS:
            data[field] = _text(row.get(field))
        data["founded_date"] = _parse_year(row.get("founded_year")) or _parse_date(row.get("founded_date"))
        data["employee_count"] = _parse_int(row.get("employee_count"))
        data["mosaic_overall"] = _parse_int(row.get("mosaic_overall"))
        data["total_funding_m"] = _parse_float(row.get("total_funding_m"))
        data["latest_funding_amount_m"] = _parse_float(row.get("latest_funding_amount_m"))
        data["latest_funding_date"] = _parse_date(row.get("latest_funding_date"))
        data["is_public"] = bool(data["stock_ticker"])
        rows.append(data)
    return rows


def read_relationships_csv(csv_path: str) -> list[dict]:
    df = _read_csv(csv_path, RELATIONSHIP_COLUMN_MAP)
    rows = []
    for _, row in df.iterrows():
        rows.append({
            "company1": _text(row.get("company1")),
            "company2": _text(row.get("company2")),
            "relationship_type": _text(row.get("relationship_type")),
            "strength": _parse_float(row.get("strength")),
            "start_date": _parse_date(row.get("start_date")),
            "end_date": _parse_date(row.get("end_date")),
            "status": _text(row.get("status")),
            "description": _text(row.get("description")),
        })
    return rows


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

async def import_companies(session, rows: list[dict]) -> int:
    existing = set((await session.execute(select(Company.company_name))).scalars().all())
    added = 0
    for data in rows:
        if data["company_name"] in existing:
            continue
        session.add(Company(**data))
        existing.add(data["company_name"])
        added += 1
        if added % 500 == 0:
            await session.flush()
            logger.info("  ... %d companies", added)
    await session.commit()
    return added


async def import_relationships(session, rows: list[dict]) -> int:
    ids = dict((await session.execute(select(Company.company_name, Company.company_id))).all())
    seen = {
        (c1, c2, t)
        for c1, c2, t in (
            await session.execute(
                select(Relationship.company1_id, Relationship.company2_id, Relationship.relationship_type)
            )
        ).all()
    }
    added = 0
    for n, data in enumerate(rows, start=1):
        c1, c2 = ids.get(data["company1"]), ids.get(data["company2"])
        rtype = data["relationship_type"]
        strength = data["strength"]
        if c1 is None or c2 is None:
            logger.warning("Row %d: unknown company (%s / %s), skipped", n, data["company1"], data["company2"])
            continue
        if c1 == c2:
            logger.warning("Row %d: self-relationship for %s, skipped", n, data["company1"])
            continue
        if rtype not in RELATIONSHIP_TYPES:
            logger.warning("Row %d: invalid relationship type %r, skipped", n, rtype)
            continue
        if strength is not None and not 0 <= strength <= 1:
            logger.warning("Row %d: strength %s outside [0, 1], skipped", n, strength)
            continue
        if (c1, c2, rtype) in seen:
            continue
        seen.add((c1, c2, rtype))
        session.add(Relationship(
            company1_id=c1,
            company2_id=c2,
            relationship_type=rtype,
            strength=strength,
            start_date=data["start_date"],
            end_date=data["end_date"],
            status=data["status"],
            description=data["description"],
        ))
        added += 1
    await session.commit()
    return added


async def migrate(
    companies_csv: Optional[str],
    relationships_csv: Optional[str] = None,
    session_factory=None,
) -> dict:
    session_factory = session_factory or async_session
    if session_factory is async_session:
        logger.info("Initialising database schema ...")
        await init_db()

    result = {"companies": 0, "relationships": 0}
    async with session_factory() as session:
        if companies_csv:
            rows = read_companies_csv(companies_csv)
            logger.info("Importing %d companies from %s ...", len(rows), companies_csv)
            result["companies"] = await import_companies(session, rows)
        if relationships_csv:
            rows = read_relationships_csv(relationships_csv)
            logger.info("Importing %d relationships from %s ...", len(rows), relationships_csv)
            result["relationships"] = await import_relationships(session, rows)

    logger.info(
        "Import complete: %d companies, %d relationships added",
        result["companies"], result["relationships"],
    )
    return result


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    parser = argparse.ArgumentParser()
    parser.add_argument("--companies", default=config_env.COMPANIES_CSV_PATH or None)
    parser.add_argument("--relationships", default=config_env.RELATIONSHIPS_CSV_PATH or None)
    args = parser.parse_args()
    if not args.companies and not args.relationships:
        parser.error("nothing to import: pass --companies and/or --relationships")
    asyncio.run(migrate(args.companies, args.relationships))


if __name__ == "__main__":
    main()
