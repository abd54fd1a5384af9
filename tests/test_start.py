"""Startup script: schema creation and optional CSV import."""

import pytest

import config_env
import start


@pytest.fixture
def calls(monkeypatch):
    record = []

    async def fake_init_db():
        record.append(("init_db",))

    async def fake_migrate(companies_csv, relationships_csv=None):
        record.append(("migrate", companies_csv, relationships_csv))
        return {"companies": 0, "relationships": 0}

    monkeypatch.setattr("backend.database.init_db", fake_init_db)
    monkeypatch.setattr("backend.migrate_csv.migrate", fake_migrate)
    return record


class TestRunDbImport:

    async def test_without_csv_paths_only_creates_tables(self, monkeypatch, calls):
        monkeypatch.setattr(config_env, "COMPANIES_CSV_PATH", "")
        monkeypatch.setattr(config_env, "RELATIONSHIPS_CSV_PATH", "")
        await start.run_db_import()
        assert calls == [("init_db",)]

    async def test_import_initialises_schema_once(self, monkeypatch, calls):
        monkeypatch.setattr(config_env, "COMPANIES_CSV_PATH", "companies.csv")
        monkeypatch.setattr(config_env, "RELATIONSHIPS_CSV_PATH", "")
        await start.run_db_import()
        assert calls == [("migrate", "companies.csv", None)]
